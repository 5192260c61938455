import pytest

from charity_nft.chain import Tx

from conftest import PRICE


def test_owner_sets_charity_address(chain, owner, seller, buyer, stranger, active_listing):
    block = chain.mine_block([Tx.contract_call("set-charity-address", [stranger.address], owner.address)])

    assert block.receipts[0].result.expect_ok() is True
    assert chain.call_read_only("get-charity-address") == stranger.address

    charity_before = chain.get_balance(stranger.address)
    chain.mine_block([Tx.contract_call("buy-nft", [active_listing], buyer.address)])
    assert chain.get_balance(stranger.address) == charity_before + PRICE * 20 // 100

def test_charity_address_must_be_valid(chain, owner):
    block = chain.mine_block([Tx.contract_call("set-charity-address", ["0x1234"], owner.address)])

    assert block.receipts[0].result.expect_err() == 107
    assert chain.call_read_only("get-charity-address") == owner.address

def test_owner_sets_donation_percentage(chain, owner):
    block = chain.mine_block([Tx.contract_call("set-donation-percentage", [30], owner.address)])

    assert block.receipts[0].result.expect_ok() is True
    assert chain.call_read_only("get-donation-percentage") == 30

def test_donation_percentage_cannot_exceed_100(chain, owner):
    block = chain.mine_block([
        Tx.contract_call("set-donation-percentage", [150], owner.address),
        Tx.contract_call("set-donation-percentage", [101], owner.address),
        Tx.contract_call("set-donation-percentage", [100], owner.address),
    ])

    assert block.receipts[0].result.expect_err() == 104
    assert block.receipts[1].result.expect_err() == 104
    block.receipts[2].result.expect_ok()
    assert chain.call_read_only("get-donation-percentage") == 100

def test_pause_blocks_mint_until_toggled_back(chain, owner, seller):
    block = chain.mine_block([Tx.contract_call("toggle-pause", [], owner.address)])
    assert block.receipts[0].result.expect_ok() is True
    assert chain.call_read_only("is-paused") is True

    block = chain.mine_block([
        Tx.contract_call("mint", ["https://example.com/art1.json", "digital-art"], seller.address)
    ])
    assert block.receipts[0].result.expect_err() == 108

    block = chain.mine_block([Tx.contract_call("toggle-pause", [], owner.address)])
    assert block.receipts[0].result.expect_ok() is True
    assert chain.call_read_only("is-paused") is False

    block = chain.mine_block([
        Tx.contract_call("mint", ["https://example.com/art1.json", "digital-art"], seller.address)
    ])
    assert block.receipts[0].result.expect_ok() == 1

def test_pause_only_affects_mint(chain, owner, seller, buyer, active_listing, campaign_id):
    chain.mine_block([Tx.contract_call("toggle-pause", [], owner.address)])

    block = chain.mine_block([
        Tx.contract_call("buy-nft", [active_listing], buyer.address),
        Tx.contract_call("transfer", [active_listing, seller.address], buyer.address),
        Tx.contract_call("list-for-sale", [active_listing, PRICE], seller.address),
        Tx.contract_call("donate-to-campaign", [campaign_id, 1_000], buyer.address),
    ])

    for receipt in block.receipts:
        receipt.result.expect_ok()

def test_non_owner_cannot_administer(chain, seller):
    block = chain.mine_block([
        Tx.contract_call("set-charity-address", [seller.address], seller.address),
        Tx.contract_call("set-donation-percentage", [25], seller.address),
        Tx.contract_call("toggle-pause", [], seller.address),
    ])

    assert [r.result.expect_err() for r in block.receipts] == [100, 100, 100]
    assert chain.call_read_only("get-donation-percentage") == 20
    assert chain.call_read_only("is-paused") is False

def test_owner_check_runs_before_argument_checks(chain, seller):
    block = chain.mine_block([
        Tx.contract_call("set-donation-percentage", [500], seller.address),
        Tx.contract_call("create-charity-campaign", ["x", "y", 0, 0], seller.address),
    ])

    assert [r.result.expect_err() for r in block.receipts] == [100, 100]

def test_contract_owner_is_deployer(chain, owner):
    assert chain.call_read_only("get-contract-owner") == owner.address

@pytest.mark.parametrize("percentage", [12.5, "30", True, -1])
def test_donation_percentage_must_be_unsigned_integer(chain, owner, percentage):
    block = chain.mine_block([Tx.contract_call("set-donation-percentage", [percentage], owner.address)])

    assert block.receipts[0].result.expect_err() == 107
    assert chain.call_read_only("get-donation-percentage") == 20
