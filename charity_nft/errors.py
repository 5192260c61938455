# file: errors.py
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes returned in Err receipts by the marketplace contract."""
    OWNER_ONLY = 100
    NOT_TOKEN_OWNER = 101
    NOT_FOR_SALE = 102
    INVALID_PRICE = 103
    CAMPAIGN_NOT_FOUND = 104
    # Shares 104 with CAMPAIGN_NOT_FOUND
    INVALID_PERCENTAGE = 104
    INSUFFICIENT_FUNDS = 105
    ALREADY_OWNER = 106
    INVALID_PARAMETER = 107
    CONTRACT_PAUSED = 108


class LedgerCode(IntEnum):
    """Codes the host ledger reports when a native transfer fails."""
    INSUFFICIENT_BALANCE = 1
    SAME_SENDER_RECIPIENT = 2
    NON_POSITIVE_AMOUNT = 3


class ContractError(Exception):
    """Raised inside a transaction; the chain turns it into Err(code)."""

    def __init__(self, code, message=""):
        self.code = int(code)
        super().__init__(message or f"contract error {self.code}")


class LedgerError(ContractError):
    """A native transfer rejected by the host ledger."""


class UnknownFunctionError(KeyError):
    """Function name is not part of the contract interface (or the wrong kind)."""


class MetadataStoreError(Exception):
    """The metadata pinning backend could not be reached or answered badly."""
