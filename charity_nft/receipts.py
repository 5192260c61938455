# file: receipts.py
from dataclasses import dataclass, field, asdict, is_dataclass
from typing import Any, List


@dataclass(frozen=True)
class Ok:
    value: Any

    def expect_ok(self):
        return self.value

    def expect_err(self):
        raise AssertionError(f"Expected Err, got Ok({self.value!r})")

    def to_json(self):
        return {"ok": to_json_value(self.value)}


@dataclass(frozen=True)
class Err:
    code: int

    def expect_ok(self):
        raise AssertionError(f"Expected Ok, got Err({self.code})")

    def expect_err(self):
        return self.code

    def to_json(self):
        return {"err": self.code}


# Events reported by the host ledger for a successful transaction
@dataclass(frozen=True)
class StxTransferEvent:
    sender: str
    recipient: str
    amount: int
    type: str = "stx_transfer_event"


@dataclass(frozen=True)
class NftMintEvent:
    token_id: int
    recipient: str
    type: str = "nft_mint_event"


@dataclass(frozen=True)
class NftTransferEvent:
    token_id: int
    sender: str
    recipient: str
    type: str = "nft_transfer_event"


@dataclass
class Receipt:
    result: Any
    events: List[Any] = field(default_factory=list)

    def to_json(self):
        return {
            "result": self.result.to_json(),
            "events": [asdict(e) for e in self.events],
        }


@dataclass
class Block:
    height: int
    receipts: List[Receipt]

    def to_json(self):
        return {"height": self.height, "receipts": [r.to_json() for r in self.receipts]}


def to_json_value(value):
    """Turn a read-only result (dataclass record, tuple, scalar) into JSON-friendly data."""
    if is_dataclass(value):
        return asdict(value)
    return value
