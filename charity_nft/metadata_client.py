# file: metadata_client.py
import logging

import requests

from charity_nft.config import METADATA_BACKEND_URL, METADATA_VIEWER_URL
from charity_nft.errors import MetadataStoreError

logger = logging.getLogger(__name__)

IPFS_SCHEME = "ipfs://"


def build_token_metadata(name, description, image_uri, category, creator):
    """JSON document pinned for a token before minting; its URI goes on-chain."""
    return {
        "name": name,
        "description": description,
        "image": image_uri,
        "attributes": [
            {"trait_type": "category", "value": category},
            {"trait_type": "creator", "value": creator},
        ],
    }


def upload_token_metadata(metadata, backend_url=METADATA_BACKEND_URL, timeout=20):
    """
    Pin a metadata dictionary through the backend and return 'ipfs://<CID>'.
    """
    try:
        response = requests.post(f"{backend_url}/upload_json", json=metadata, timeout=timeout)
        response.raise_for_status()
        cid = response.json()["cid"]
    except requests.exceptions.RequestException as e:
        raise MetadataStoreError(f"Could not pin metadata through {backend_url}: {e}") from e
    except (KeyError, ValueError) as e:
        raise MetadataStoreError(f"Unexpected response from {backend_url}: {e}") from e

    logger.info(f"[Metadata] Pinned token metadata, CID: {cid}")
    return f"{IPFS_SCHEME}{cid}"


def fetch_token_metadata(uri, viewer_url=METADATA_VIEWER_URL, timeout=20):
    """Resolve an ipfs:// token URI through the viewer and return the JSON document."""
    if not uri.startswith(IPFS_SCHEME):
        raise ValueError(f"Not an IPFS URI: {uri}")
    cid = uri[len(IPFS_SCHEME):]

    try:
        response = requests.get(f"{viewer_url}{cid}", timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        raise MetadataStoreError(f"Could not fetch {uri}: {e}") from e
    except ValueError as e:
        raise MetadataStoreError(f"Metadata at {uri} is not JSON: {e}") from e
