"""Typed structures exchanged with the marketplace backend."""
from .attributes import Level, Property, Stat
from .txs import (
    TEMPLATE_TYPES,
    AtomicMatchTxInfo,
    CreateCollectionTxInfo,
    MintNftTxInfo,
    OfferSide,
    OfferTxInfo,
    TransferNftTxInfo,
    TxKind,
    WithdrawNftTxInfo,
)

__all__ = [
    "TEMPLATE_TYPES",
    "AtomicMatchTxInfo",
    "CreateCollectionTxInfo",
    "Level",
    "MintNftTxInfo",
    "OfferSide",
    "OfferTxInfo",
    "Property",
    "Stat",
    "TransferNftTxInfo",
    "TxKind",
    "WithdrawNftTxInfo",
]
