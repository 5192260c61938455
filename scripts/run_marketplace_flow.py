from charity_nft.chain import MockChain, Tx
from charity_nft.config import configure_logging, load_config


def main():
    # 1. SETUP
    config = load_config()
    configure_logging(config.log_level)
    chain = MockChain(config)

    deployer = chain.accounts["deployer"].address
    seller = chain.accounts["wallet_1"].address
    buyer = chain.accounts["wallet_2"].address
    donor = chain.accounts["wallet_3"].address
    charity = chain.call_read_only("get-charity-address")
    percentage = chain.call_read_only("get-donation-percentage")

    print("--- 1. DEPLOYMENT ---")
    print(f"Contract owner: {deployer}")
    print(f"Charity address: {charity} ({percentage}% of each sale)")

    # ==========================================
    # SCENARIO A: SALE WITH CHARITY SPLIT
    # ==========================================
    print("\n=== SCENARIO A: SALE WITH CHARITY SPLIT ===")

    price = 5_000_000
    block = chain.mine_block([
        Tx.contract_call("mint", ["https://example.com/masterpiece.json", "fine-art"], seller),
        Tx.contract_call("list-for-sale", [1, price], seller),
    ])
    token_id = block.receipts[0].result.expect_ok()
    block.receipts[1].result.expect_ok()
    print(f"-> Seller minted token #{token_id} and listed it for {price}.")

    charity_before = chain.get_balance(charity)
    seller_before = chain.get_balance(seller)

    block = chain.mine_block([Tx.contract_call("buy-nft", [token_id], buyer)])
    block.receipts[0].result.expect_ok()
    print("-> Buyer bought the token.")

    print("\n--- [CHECK] Settlement ---")
    charity_share = price * percentage // 100

    assert chain.call_read_only("get-owner", [token_id]) == buyer
    print("[PASS] Buyer owns the token.")

    assert chain.call_read_only("get-price", [token_id]) is None
    print("[PASS] Listing cleared after sale.")

    assert chain.get_balance(charity) == charity_before + charity_share
    print(f"[PASS] Charity received {charity_share}.")

    assert chain.get_balance(seller) == seller_before + price - charity_share
    print(f"[PASS] Seller received {price - charity_share}.")

    # ==========================================
    # SCENARIO B: CAMPAIGN LIFECYCLE
    # ==========================================
    print("\n=== SCENARIO B: CAMPAIGN LIFECYCLE ===")

    block = chain.mine_block([
        Tx.contract_call("create-charity-campaign",
                         ["Save the Ocean", "Clean up ocean plastic", 50_000_000, 8640], deployer),
    ])
    campaign_id = block.receipts[0].result.expect_ok()

    chain.mine_block([
        Tx.contract_call("donate-to-campaign", [campaign_id, 2_000_000], donor),
        Tx.contract_call("donate-to-campaign", [campaign_id, 1_000_000], donor),
    ])
    campaign = chain.call_read_only("get-campaign-details", [campaign_id])
    history = chain.call_read_only("get-user-donation-history", [donor, campaign_id])

    assert campaign.raised == 3_000_000
    assert history.amount == 3_000_000
    print(f"[PASS] Campaign #{campaign_id} raised {campaign.raised} of {campaign.goal}.")

    chain.mine_block([Tx.contract_call("end-campaign", [campaign_id], deployer)])
    block = chain.mine_block([Tx.contract_call("donate-to-campaign", [campaign_id, 1_000], donor)])
    assert block.receipts[0].result.expect_err() == 104
    print("[PASS] Ended campaign rejects donations.")

    stats = chain.call_read_only("get-platform-stats")
    print(f"\nSales: {stats.sales}, volume: {stats.volume}, routed to charity: {stats.charity_total}")
    print("\n=== ALL SCENARIOS PASSED ===")


if __name__ == "__main__":
    main()
