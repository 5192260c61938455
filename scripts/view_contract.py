import sys

import requests

from charity_nft.config import load_config
from charity_nft.errors import MetadataStoreError
from charity_nft.metadata_client import IPFS_SCHEME, fetch_token_metadata


def read(api_url, function, *args):
    response = requests.post(f"{api_url}/read/{function}", json={"args": list(args)}, timeout=10)
    response.raise_for_status()
    return response.json()["result"]


def main(token_id=1, campaign_id=1):
    # =========================================================================
    # 1. CONFIGURATION
    # =========================================================================
    config = load_config()
    api_url = f"http://{config.api_host}:{config.api_port}"

    try:
        accounts = requests.get(f"{api_url}/accounts", timeout=10).json()
    except requests.exceptions.RequestException as e:
        print(f"ERROR: cannot reach the marketplace API at {api_url}: {e}")
        return 1
    print(f">>> Connected to {api_url} ({len(accounts)} accounts)")

    # =========================================================================
    # 2. CONTRACT CONFIGURATION
    # =========================================================================
    print("\n[1] Contract configuration...")
    print(f"   + Owner:      {read(api_url, 'get-contract-owner')}")
    print(f"   + Charity:    {read(api_url, 'get-charity-address')}")
    print(f"   + Donation %: {read(api_url, 'get-donation-percentage')}")
    print(f"   + Paused:     {read(api_url, 'is-paused')}")

    # =========================================================================
    # 3. TOKEN
    # =========================================================================
    print(f"\n[2] Token #{token_id}...")
    owner = read(api_url, "get-owner", token_id)
    if owner is None:
        print("   INFO: token has not been minted.")
    else:
        uri = read(api_url, "get-token-uri", token_id)
        metadata = read(api_url, "get-token-metadata", token_id)
        price = read(api_url, "get-price", token_id)
        print(f"   + Owner:    {owner}")
        print(f"   + URI:      {uri}")
        print(f"   + Creator:  {metadata['creator']} (category {metadata['category']}, block {metadata['timestamp']})")
        print(f"   + Price:    {price if price is not None else 'not listed'}")

        if uri.startswith(IPFS_SCHEME):
            try:
                document = fetch_token_metadata(uri, viewer_url=config.metadata_viewer_url)
                print(f"   + Name:     {document.get('name')}")
            except MetadataStoreError as e:
                print(f"   WARNING: {e}")

    # =========================================================================
    # 4. CAMPAIGN
    # =========================================================================
    print(f"\n[3] Campaign #{campaign_id}...")
    campaign = read(api_url, "get-campaign-details", campaign_id)
    if campaign is None:
        print("   INFO: campaign does not exist.")
    else:
        state = "active" if campaign["active"] else "ended"
        print(f"   + {campaign['name']}: {campaign['raised']}/{campaign['goal']} ({state})")

    stats = read(api_url, "get-platform-stats")
    print(f"\n[4] Sales: {stats['sales']}, volume: {stats['volume']}, to charity: {stats['charity_total']}")
    print("\n=== DONE ===")
    return 0


if __name__ == "__main__":
    sys.exit(main(*[int(a) for a in sys.argv[1:3]]))
