"""Dataclasses describing common results returned by the SDK."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True, frozen=True)
class ContractAddresses:
    """On-chain addresses resolved once and passed to whoever needs them."""

    legend_contract: str
    price_oracle: str


@dataclass(slots=True)
class Layer2BasicInfo:
    contract_addresses: List[str]
    block_committed: Optional[int] = None
    block_verified: Optional[int] = None
    total_transactions: Optional[int] = None


@dataclass(slots=True)
class L2Account:
    seed: str
    public_key: str


@dataclass(slots=True)
class CollectionParams:
    """Optional collection metadata sent alongside collection transactions."""

    description: str = ""
    collection_url: str = ""
    external_link: str = ""
    twitter_link: str = ""
    instagram_link: str = ""
    discord_link: str = ""
    telegram_link: str = ""
    logo_image: str = ""
    featured_image: str = ""
    banner_image: str = ""
    payment_asset_ids: List[int] = field(default_factory=list)
