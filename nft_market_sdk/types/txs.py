"""Typed transaction templates returned by the marketplace backend.

Each template is a frozen dataclass whose fields carry the backend's JSON key
and a wire codec in their metadata:

``int``
    non-negative integer, JSON number (big amounts may also arrive as strings)
``str``
    UTF-8 text
``bytes``
    binary value, base64 on the wire
``offer``
    embedded :class:`OfferTxInfo`

The ``sig`` field is the signature slot and is excluded from the signed
message of its own template.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Optional, Type

SIG_FIELD = "sig"


class TxKind(str, Enum):
    CREATE_COLLECTION = "create_collection"
    MINT_NFT = "mint_nft"
    TRANSFER_NFT = "transfer_nft"
    WITHDRAW_NFT = "withdraw_nft"
    OFFER = "offer"
    ATOMIC_MATCH = "atomic_match"


# Leading element of every signed message, keeps messages of different kinds apart.
TX_TYPE_TAGS: Dict[TxKind, int] = {
    TxKind.CREATE_COLLECTION: 11,
    TxKind.MINT_NFT: 12,
    TxKind.TRANSFER_NFT: 13,
    TxKind.ATOMIC_MATCH: 14,
    TxKind.WITHDRAW_NFT: 16,
    TxKind.OFFER: 19,
}


class OfferSide(IntEnum):
    """Market direction of an offer, stored in the offer's ``Type`` field."""

    BUY = 0
    SELL = 1

    @classmethod
    def from_is_sell(cls, is_sell: bool) -> "OfferSide":
        return cls.SELL if is_sell else cls.BUY


def _field(json_key: str, codec: str, **kwargs: Any) -> Any:
    return dataclasses.field(metadata={"json": json_key, "codec": codec}, **kwargs)


def _sig_field() -> Any:
    return _field("Sig", "bytes", default=None)


@dataclass(slots=True, frozen=True)
class CreateCollectionTxInfo:
    account_index: int = _field("AccountIndex", "int")
    collection_id: int = _field("CollectionId", "int")
    name: str = _field("Name", "str")
    gas_account_index: int = _field("GasAccountIndex", "int")
    gas_fee_asset_id: int = _field("GasFeeAssetId", "int")
    gas_fee_asset_amount: int = _field("GasFeeAssetAmount", "int")
    expired_at: int = _field("ExpiredAt", "int")
    nonce: int = _field("Nonce", "int")
    introduction: str = _field("Introduction", "str", default="")
    sig: Optional[bytes] = _sig_field()


@dataclass(slots=True, frozen=True)
class MintNftTxInfo:
    creator_account_index: int = _field("CreatorAccountIndex", "int")
    to_account_index: int = _field("ToAccountIndex", "int")
    to_account_name_hash: str = _field("ToAccountNameHash", "str")
    nft_index: int = _field("NftIndex", "int")
    nft_content_hash: str = _field("NftContentHash", "str")
    nft_collection_id: int = _field("NftCollectionId", "int")
    creator_treasury_rate: int = _field("CreatorTreasuryRate", "int")
    gas_account_index: int = _field("GasAccountIndex", "int")
    gas_fee_asset_id: int = _field("GasFeeAssetId", "int")
    gas_fee_asset_amount: int = _field("GasFeeAssetAmount", "int")
    expired_at: int = _field("ExpiredAt", "int")
    nonce: int = _field("Nonce", "int")
    sig: Optional[bytes] = _sig_field()


@dataclass(slots=True, frozen=True)
class TransferNftTxInfo:
    from_account_index: int = _field("FromAccountIndex", "int")
    to_account_index: int = _field("ToAccountIndex", "int")
    to_account_name_hash: str = _field("ToAccountNameHash", "str")
    nft_index: int = _field("NftIndex", "int")
    gas_account_index: int = _field("GasAccountIndex", "int")
    gas_fee_asset_id: int = _field("GasFeeAssetId", "int")
    gas_fee_asset_amount: int = _field("GasFeeAssetAmount", "int")
    expired_at: int = _field("ExpiredAt", "int")
    nonce: int = _field("Nonce", "int")
    call_data: str = _field("CallData", "str", default="")
    call_data_hash: bytes = _field("CallDataHash", "bytes", default=b"")
    sig: Optional[bytes] = _sig_field()


@dataclass(slots=True, frozen=True)
class WithdrawNftTxInfo:
    account_index: int = _field("AccountIndex", "int")
    creator_account_index: int = _field("CreatorAccountIndex", "int")
    creator_account_name_hash: bytes = _field("CreatorAccountNameHash", "bytes")
    creator_treasury_rate: int = _field("CreatorTreasuryRate", "int")
    nft_index: int = _field("NftIndex", "int")
    nft_content_hash: bytes = _field("NftContentHash", "bytes")
    nft_l1_address: str = _field("NftL1Address", "str")
    nft_l1_token_id: int = _field("NftL1TokenId", "int")
    collection_id: int = _field("CollectionId", "int")
    to_address: str = _field("ToAddress", "str")
    gas_account_index: int = _field("GasAccountIndex", "int")
    gas_fee_asset_id: int = _field("GasFeeAssetId", "int")
    gas_fee_asset_amount: int = _field("GasFeeAssetAmount", "int")
    expired_at: int = _field("ExpiredAt", "int")
    nonce: int = _field("Nonce", "int")
    sig: Optional[bytes] = _sig_field()


@dataclass(slots=True, frozen=True)
class OfferTxInfo:
    type: int = _field("Type", "int")
    offer_id: int = _field("OfferId", "int")
    account_index: int = _field("AccountIndex", "int")
    nft_index: int = _field("NftIndex", "int")
    asset_id: int = _field("AssetId", "int")
    asset_amount: int = _field("AssetAmount", "int")
    listed_at: int = _field("ListedAt", "int")
    expired_at: int = _field("ExpiredAt", "int")
    treasury_rate: int = _field("TreasuryRate", "int")
    sig: Optional[bytes] = _sig_field()


@dataclass(slots=True, frozen=True)
class AtomicMatchTxInfo:
    account_index: int = _field("AccountIndex", "int")
    buy_offer: OfferTxInfo = _field("BuyOffer", "offer")
    sell_offer: OfferTxInfo = _field("SellOffer", "offer")
    gas_account_index: int = _field("GasAccountIndex", "int")
    gas_fee_asset_id: int = _field("GasFeeAssetId", "int")
    gas_fee_asset_amount: int = _field("GasFeeAssetAmount", "int")
    creator_amount: int = _field("CreatorAmount", "int")
    treasury_amount: int = _field("TreasuryAmount", "int")
    nonce: int = _field("Nonce", "int")
    expired_at: int = _field("ExpiredAt", "int")
    sig: Optional[bytes] = _sig_field()


TEMPLATE_TYPES: Dict[TxKind, Type[Any]] = {
    TxKind.CREATE_COLLECTION: CreateCollectionTxInfo,
    TxKind.MINT_NFT: MintNftTxInfo,
    TxKind.TRANSFER_NFT: TransferNftTxInfo,
    TxKind.WITHDRAW_NFT: WithdrawNftTxInfo,
    TxKind.OFFER: OfferTxInfo,
    TxKind.ATOMIC_MATCH: AtomicMatchTxInfo,
}
