import pytest

from charity_nft.chain import MockChain, Tx

PRICE = 1_000_000


@pytest.fixture
def chain():
    return MockChain()

@pytest.fixture
def owner(chain):
    return chain.accounts["deployer"]

@pytest.fixture
def seller(chain):
    return chain.accounts["wallet_1"]

@pytest.fixture
def buyer(chain):
    return chain.accounts["wallet_2"]

@pytest.fixture
def stranger(chain):
    return chain.accounts["wallet_3"]

@pytest.fixture
def minted_token_id(chain, seller):
    block = chain.mine_block([
        Tx.contract_call("mint", ["https://example.com/art1.json", "digital-art"], seller.address)
    ])
    return block.receipts[0].result.expect_ok()

@pytest.fixture
def active_listing(chain, seller, minted_token_id):
    block = chain.mine_block([Tx.contract_call("list-for-sale", [minted_token_id, PRICE], seller.address)])
    block.receipts[0].result.expect_ok()
    return minted_token_id

@pytest.fixture
def campaign_id(chain, owner):
    block = chain.mine_block([
        Tx.contract_call("create-charity-campaign",
                         ["Save the Forest", "Plant trees and protect forests", 10_000_000, 1000],
                         owner.address)
    ])
    return block.receipts[0].result.expect_ok()
