# file: contract.py
"""
NFT marketplace contract with charity split.

Every public function receives a transaction context (sender, block height,
native transfer primitive) from the host chain and either returns a value or
raises ContractError. The chain rolls back state and balances when a
function raises.
"""
import dataclasses
import logging

from charity_nft.accounts import is_valid_identity
from charity_nft.errors import ContractError, ErrorCode, UnknownFunctionError
from charity_nft.receipts import NftMintEvent, NftTransferEvent
from charity_nft.state import Campaign, ContractState, DonationRecord, TokenMetadata

logger = logging.getLogger(__name__)

# wire name -> (function, owner_only)
PUBLIC_FUNCTIONS = {}
# wire name -> function
READ_ONLY_FUNCTIONS = {}


def public(name, owner_only=False):
    def decorator(func):
        PUBLIC_FUNCTIONS[name] = (func, owner_only)
        return func
    return decorator


def read_only(name):
    def decorator(func):
        READ_ONLY_FUNCTIONS[name] = func
        return func
    return decorator


def _require_uint(value, name):
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ContractError(ErrorCode.INVALID_PARAMETER, f"{name} must be an unsigned integer, got {value!r}")


class CharityMarketplace:
    def __init__(self, deployer, charity_address=None, donation_percentage=20):
        if not 0 <= donation_percentage <= 100:
            raise ValueError(f"donation_percentage must be within 0..100, got {donation_percentage}")
        self.state = ContractState(
            contract_owner=deployer,
            charity_address=charity_address or deployer,
            donation_percentage=donation_percentage,
        )
        logger.info(f"[Contract] Deployed by {deployer}, charity={self.state.charity_address}, "
                    f"donation={donation_percentage}%")

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def is_contract_owner(self, who):
        return who == self.state.contract_owner

    def call_public(self, name, args, ctx):
        entry = PUBLIC_FUNCTIONS.get(name)
        if entry is None:
            raise UnknownFunctionError(name)
        func, owner_only = entry
        if owner_only and not self.is_contract_owner(ctx.sender):
            raise ContractError(ErrorCode.OWNER_ONLY, f"{name}: caller {ctx.sender} is not the contract owner")
        return func(self, ctx, *args)

    def call_read_only(self, name, args):
        func = READ_ONLY_FUNCTIONS.get(name)
        if func is None:
            raise UnknownFunctionError(name)
        return func(self, *args)

    def _require_token_owner(self, token_id, who):
        if self.state.owner_of(token_id) != who:
            raise ContractError(ErrorCode.NOT_TOKEN_OWNER, f"{who} does not own token #{token_id}")

    def _move_token(self, ctx, token_id, sender, recipient):
        self.state.token_owners[token_id] = recipient
        self.state.token_prices.pop(token_id, None)
        ctx.emit(NftTransferEvent(token_id=token_id, sender=sender, recipient=recipient))

    # ------------------------------------------------------------------
    # Asset registry
    # ------------------------------------------------------------------

    @public("mint")
    def mint(self, ctx, uri, category):
        if self.state.paused:
            raise ContractError(ErrorCode.CONTRACT_PAUSED, "minting is paused")

        token_id = self.state.last_token_id + 1
        self.state.token_owners[token_id] = ctx.sender
        self.state.token_uris[token_id] = uri
        self.state.token_metadata[token_id] = TokenMetadata(
            creator=ctx.sender, category=category, timestamp=ctx.block_height
        )
        self.state.last_token_id = token_id
        ctx.emit(NftMintEvent(token_id=token_id, recipient=ctx.sender))

        logger.info(f"[Registry] {ctx.sender} minted token #{token_id} ({category}) at block {ctx.block_height}")
        return token_id

    @public("transfer")
    def transfer(self, ctx, token_id, to):
        self._require_token_owner(token_id, ctx.sender)
        if not is_valid_identity(to) or to == ctx.sender:
            raise ContractError(ErrorCode.INVALID_PARAMETER, f"invalid recipient {to!r}")

        self._move_token(ctx, token_id, ctx.sender, to)
        logger.info(f"[Registry] Token #{token_id} transferred {ctx.sender} -> {to}")
        return True

    @read_only("get-owner")
    def get_owner(self, token_id):
        return self.state.owner_of(token_id)

    @read_only("get-token-uri")
    def get_token_uri(self, token_id):
        return self.state.token_uris.get(token_id)

    @read_only("get-token-metadata")
    def get_token_metadata(self, token_id):
        return self.state.token_metadata.get(token_id)

    @read_only("get-last-token-id")
    def get_last_token_id(self):
        return self.state.last_token_id

    # ------------------------------------------------------------------
    # Marketplace / settlement
    # ------------------------------------------------------------------

    @public("list-for-sale")
    def list_for_sale(self, ctx, token_id, price):
        self._require_token_owner(token_id, ctx.sender)
        _require_uint(price, "price")
        if price <= 0:
            raise ContractError(ErrorCode.INVALID_PRICE, f"price must be positive, got {price}")

        self.state.token_prices[token_id] = price
        logger.info(f"[Marketplace] Token #{token_id} listed by {ctx.sender} for {price}")
        return True

    @public("unlist")
    def unlist(self, ctx, token_id):
        self._require_token_owner(token_id, ctx.sender)
        if token_id not in self.state.token_prices:
            raise ContractError(ErrorCode.NOT_FOR_SALE, f"token #{token_id} is not listed")

        del self.state.token_prices[token_id]
        logger.info(f"[Marketplace] Token #{token_id} unlisted")
        return True

    @read_only("get-price")
    def get_price(self, token_id):
        return self.state.token_prices.get(token_id)

    @public("buy-nft")
    def buy_nft(self, ctx, token_id):
        price = self.state.token_prices.get(token_id)
        if price is None:
            raise ContractError(ErrorCode.NOT_FOR_SALE, f"token #{token_id} is not listed")

        buyer = ctx.sender
        seller = self.state.owner_of(token_id)
        if buyer == seller:
            raise ContractError(ErrorCode.ALREADY_OWNER, f"{buyer} already owns token #{token_id}")
        if ctx.balance_of(buyer) < price:
            raise ContractError(ErrorCode.INSUFFICIENT_FUNDS, f"{buyer} cannot pay {price}")

        charity_share = price * self.state.donation_percentage // 100
        seller_share = price - charity_share

        if charity_share > 0:
            ctx.transfer_stx(charity_share, buyer, self.state.charity_address)
        if seller_share > 0:
            ctx.transfer_stx(seller_share, buyer, seller)
        self._move_token(ctx, token_id, seller, buyer)

        stats = self.state.stats
        stats.sales += 1
        stats.volume += price
        stats.charity_total += charity_share

        logger.info(f"[Marketplace] Token #{token_id} sold {seller} -> {buyer} for {price} "
                    f"(charity {charity_share}, seller {seller_share})")
        return True

    @read_only("get-platform-stats")
    def get_platform_stats(self):
        return dataclasses.replace(self.state.stats)

    # ------------------------------------------------------------------
    # Campaigns and donations
    # ------------------------------------------------------------------

    @public("create-charity-campaign", owner_only=True)
    def create_charity_campaign(self, ctx, name, description, goal, duration):
        _require_uint(goal, "goal")
        _require_uint(duration, "duration")
        if goal <= 0 or duration <= 0:
            raise ContractError(ErrorCode.INVALID_PARAMETER, "goal and duration must be positive")

        campaign_id = self.state.last_campaign_id + 1
        self.state.campaigns[campaign_id] = Campaign(
            name=name,
            description=description,
            goal=goal,
            raised=0,
            active=True,
            created_at=ctx.block_height,
            end_block=ctx.block_height + duration,
        )
        self.state.last_campaign_id = campaign_id

        logger.info(f"[Campaigns] Campaign #{campaign_id} '{name}' created, goal={goal}, "
                    f"ends at block {ctx.block_height + duration}")
        return campaign_id

    def _open_campaign(self, campaign_id, block_height):
        # Ended, expired and missing campaigns all look the same to callers
        campaign = self.state.campaigns.get(campaign_id)
        if campaign is None or not campaign.active or block_height > campaign.end_block:
            raise ContractError(ErrorCode.CAMPAIGN_NOT_FOUND, f"campaign #{campaign_id} not found or inactive")
        return campaign

    @public("donate-to-campaign")
    def donate_to_campaign(self, ctx, campaign_id, amount):
        """
        Move amount from the donor to the charity address and credit the campaign.

        The host ledger refuses self-transfers, so while the donor is the charity
        address itself (the deployer, by default) donations fail with err 2.
        """
        campaign = self._open_campaign(campaign_id, ctx.block_height)
        _require_uint(amount, "amount")
        if amount <= 0:
            raise ContractError(ErrorCode.INVALID_PARAMETER, "donation amount must be positive")
        if ctx.balance_of(ctx.sender) < amount:
            raise ContractError(ErrorCode.INSUFFICIENT_FUNDS, f"{ctx.sender} cannot donate {amount}")

        ctx.transfer_stx(amount, ctx.sender, self.state.charity_address)
        campaign.raised += amount

        key = (ctx.sender, campaign_id)
        record = self.state.donations.get(key)
        if record is None:
            self.state.donations[key] = DonationRecord(amount=amount, donations=1, timestamp=ctx.block_height)
        else:
            record.amount += amount
            record.donations += 1
            record.timestamp = ctx.block_height

        logger.info(f"[Campaigns] {ctx.sender} donated {amount} to campaign #{campaign_id} "
                    f"(raised {campaign.raised}/{campaign.goal})")
        return True

    @public("end-campaign", owner_only=True)
    def end_campaign(self, ctx, campaign_id):
        # Expired campaigns can still be ended; only missing or ended ones are refused
        campaign = self.state.campaigns.get(campaign_id)
        if campaign is None or not campaign.active:
            raise ContractError(ErrorCode.CAMPAIGN_NOT_FOUND, f"campaign #{campaign_id} not found or already ended")
        campaign.active = False
        logger.info(f"[Campaigns] Campaign #{campaign_id} ended with {campaign.raised} raised")
        return True

    @read_only("get-campaign-details")
    def get_campaign_details(self, campaign_id):
        campaign = self.state.campaigns.get(campaign_id)
        return dataclasses.replace(campaign) if campaign else None

    @read_only("get-user-donation-history")
    def get_user_donation_history(self, donor, campaign_id):
        record = self.state.donations.get((donor, campaign_id))
        return dataclasses.replace(record) if record else None

    @read_only("get-campaign-count")
    def get_campaign_count(self):
        return self.state.last_campaign_id

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    @public("set-charity-address", owner_only=True)
    def set_charity_address(self, ctx, address):
        if not is_valid_identity(address):
            raise ContractError(ErrorCode.INVALID_PARAMETER, f"invalid charity address {address!r}")
        self.state.charity_address = address
        logger.info(f"[Admin] Charity address set to {address}")
        return True

    @public("set-donation-percentage", owner_only=True)
    def set_donation_percentage(self, ctx, percentage):
        _require_uint(percentage, "percentage")
        if percentage > 100:
            raise ContractError(ErrorCode.INVALID_PERCENTAGE, f"percentage {percentage} exceeds 100")
        self.state.donation_percentage = percentage
        logger.info(f"[Admin] Donation percentage set to {percentage}%")
        return True

    @public("toggle-pause", owner_only=True)
    def toggle_pause(self, ctx):
        self.state.paused = not self.state.paused
        logger.info(f"[Admin] Contract {'paused' if self.state.paused else 'unpaused'}")
        return True

    @read_only("get-charity-address")
    def get_charity_address(self):
        return self.state.charity_address

    @read_only("get-donation-percentage")
    def get_donation_percentage(self):
        return self.state.donation_percentage

    @read_only("is-paused")
    def is_paused(self):
        return self.state.paused

    @read_only("get-contract-owner")
    def get_contract_owner(self):
        return self.state.contract_owner
