# file: chain.py
"""
In-process host ledger for the marketplace contract.

MockChain orders transactions into blocks, holds native balances and runs
every transaction against a snapshot of contract state and balances: a
transaction either returns Ok and keeps all its effects, or returns Err and
leaves nothing behind.
"""
import copy
import logging
from dataclasses import dataclass, field
from typing import Any, List

from charity_nft.accounts import build_accounts
from charity_nft.config import ChainConfig
from charity_nft.contract import PUBLIC_FUNCTIONS, CharityMarketplace
from charity_nft.errors import ContractError, LedgerCode, LedgerError, UnknownFunctionError
from charity_nft.receipts import Block, Err, Ok, Receipt, StxTransferEvent

logger = logging.getLogger(__name__)


@dataclass
class Tx:
    function: str
    args: List[Any] = field(default_factory=list)
    sender: str = ""

    @classmethod
    def contract_call(cls, function, args, sender):
        return cls(function=function, args=list(args), sender=sender)


class TxContext:
    """What a contract function sees of the chain while it executes."""

    def __init__(self, chain, sender, block_height):
        self._chain = chain
        self.sender = sender
        self.block_height = block_height
        self.events = []

    def emit(self, event):
        self.events.append(event)

    def balance_of(self, address):
        return self._chain.get_balance(address)

    def transfer_stx(self, amount, sender, recipient):
        self._chain.transfer_stx(amount, sender, recipient)
        self.emit(StxTransferEvent(sender=sender, recipient=recipient, amount=amount))


class MockChain:
    def __init__(self, config=None):
        config = config or ChainConfig()
        self.config = config
        self.accounts = build_accounts(config.account_keys)
        self.balances = {acct.address: config.initial_balance for acct in self.accounts.values()}
        # Height 1 is the deployment block; the first mined block is 2
        self.block_height = 1

        deployer = self.accounts[config.deployer].address
        charity = self.accounts[config.charity_account].address if config.charity_account else deployer
        self.contract = CharityMarketplace(deployer, charity, config.donation_percentage)
        logger.info(f"[MockChain] Started with {len(self.accounts)} accounts, deployer {deployer}")

    # ------------------------------------------------------------------
    # Native balances
    # ------------------------------------------------------------------

    def get_balance(self, address):
        return self.balances.get(address, 0)

    def transfer_stx(self, amount, sender, recipient):
        if amount <= 0:
            raise LedgerError(LedgerCode.NON_POSITIVE_AMOUNT, f"cannot transfer {amount}")
        if sender == recipient:
            raise LedgerError(LedgerCode.SAME_SENDER_RECIPIENT, f"{sender} cannot pay itself")
        if self.get_balance(sender) < amount:
            raise LedgerError(LedgerCode.INSUFFICIENT_BALANCE, f"{sender} has less than {amount}")

        self.balances[sender] -= amount
        self.balances[recipient] = self.get_balance(recipient) + amount
        logger.debug(f"[MockChain] Transferred {amount} {sender} -> {recipient}")

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def mine_block(self, transactions):
        for tx in transactions:
            if tx.function not in PUBLIC_FUNCTIONS:
                raise UnknownFunctionError(tx.function)

        # A caller bug anywhere in the block discards the whole block
        block_snapshot = (copy.deepcopy(self.contract.state), dict(self.balances), self.block_height)
        self.block_height += 1
        try:
            receipts = [self._apply(tx) for tx in transactions]
        except Exception:
            self.contract.state, self.balances, self.block_height = block_snapshot
            logger.warning(f"[MockChain] Block {self.block_height + 1} discarded: malformed transaction")
            raise
        logger.info(f"[MockChain] Mined block {self.block_height} with {len(receipts)} transaction(s)")
        return Block(height=self.block_height, receipts=receipts)

    def mine_empty_block(self, count=1):
        self.block_height += count
        return self.block_height

    def _apply(self, tx):
        snapshot = (copy.deepcopy(self.contract.state), dict(self.balances))
        ctx = TxContext(self, tx.sender, self.block_height)
        try:
            value = self.contract.call_public(tx.function, tx.args, ctx)
        except ContractError as e:
            self.contract.state, self.balances = snapshot
            logger.info(f"[MockChain] {tx.function} from {tx.sender} failed with err {e.code}: {e}")
            return Receipt(result=Err(e.code))
        return Receipt(result=Ok(value), events=ctx.events)

    def call_read_only(self, function, args=()):
        return self.contract.call_read_only(function, list(args))
