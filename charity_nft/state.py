# file: state.py
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class TokenMetadata:
    creator: str
    category: str
    timestamp: int


@dataclass
class Campaign:
    name: str
    description: str
    goal: int
    raised: int
    active: bool
    created_at: int
    end_block: int


@dataclass
class DonationRecord:
    amount: int
    donations: int
    timestamp: int


@dataclass
class SaleStats:
    sales: int = 0
    volume: int = 0
    charity_total: int = 0


@dataclass
class ContractState:
    """All storage of one marketplace contract. Only the contract mutates it."""
    contract_owner: str
    charity_address: str
    donation_percentage: int = 20
    paused: bool = False
    last_token_id: int = 0
    last_campaign_id: int = 0
    token_owners: Dict[int, str] = field(default_factory=dict)
    token_uris: Dict[int, str] = field(default_factory=dict)
    token_metadata: Dict[int, TokenMetadata] = field(default_factory=dict)
    token_prices: Dict[int, int] = field(default_factory=dict)
    campaigns: Dict[int, Campaign] = field(default_factory=dict)
    # (donor, campaign_id) -> record
    donations: Dict[Tuple[str, int], DonationRecord] = field(default_factory=dict)
    stats: SaleStats = field(default_factory=SaleStats)

    def owner_of(self, token_id) -> Optional[str]:
        return self.token_owners.get(token_id)
