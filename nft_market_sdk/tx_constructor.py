"""Decode, override, sign and serialize marketplace transactions.

Every transaction kind goes through :func:`construct_tx`. The per-kind table
only decides which overrides are applied before signing; overrides return a
new template and never touch the decoded one.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Any, Callable, Dict, Optional, Union

from .decoder import TemplateInput, decode_tx_template, parse_tx_kind
from .encoding import serialize_tx, signing_message
from .errors import SigningError
from .key_manager import KeyManager
from .types.txs import TX_TYPE_TAGS, OfferSide, TxKind

logger = logging.getLogger(__name__)

Override = Callable[[Any], Any]


def override_introduction(description: str) -> Override:
    """Replace the collection introduction; the server's copy is never trusted."""

    def _apply(template: Any) -> Any:
        return dataclasses.replace(template, introduction=description)

    return _apply


def override_offer_side(is_sell: bool) -> Override:
    def _apply(template: Any) -> Any:
        return dataclasses.replace(template, type=int(OfferSide.from_is_sell(is_sell)))

    return _apply


def _no_override(template: Any) -> Any:
    return template


DEFAULT_OVERRIDES: Dict[TxKind, Override] = {
    TxKind.CREATE_COLLECTION: _no_override,
    TxKind.MINT_NFT: _no_override,
    TxKind.TRANSFER_NFT: _no_override,
    TxKind.WITHDRAW_NFT: _no_override,
    TxKind.OFFER: _no_override,
    TxKind.ATOMIC_MATCH: _no_override,
}


def sign_template(key_manager: Optional[KeyManager], kind: TxKind, template: Any) -> Any:
    """Return a copy of ``template`` with its signature slot filled in."""

    if key_manager is None:
        raise SigningError.missing_key()
    message = signing_message(template, TX_TYPE_TAGS[kind])
    signature = key_manager.sign(message)
    return dataclasses.replace(template, sig=signature)


def construct_tx(
    key_manager: Optional[KeyManager],
    kind: Union[TxKind, str],
    payload: TemplateInput,
    override: Optional[Override] = None,
) -> str:
    tx_kind = parse_tx_kind(kind)
    template = decode_tx_template(tx_kind, payload)
    prepared = (override or DEFAULT_OVERRIDES[tx_kind])(template)
    signed = sign_template(key_manager, tx_kind, prepared)
    logger.debug("signed %s transaction", tx_kind.value)
    return serialize_tx(signed)


def prepare_create_collection_tx_info(
    key_manager: Optional[KeyManager], tx_info_prepare: TemplateInput, description: str
) -> str:
    return construct_tx(
        key_manager, TxKind.CREATE_COLLECTION, tx_info_prepare, override_introduction(description)
    )


def prepare_mint_nft_tx_info(key_manager: Optional[KeyManager], tx_info_prepare: TemplateInput) -> str:
    return construct_tx(key_manager, TxKind.MINT_NFT, tx_info_prepare)


def prepare_transfer_nft_tx_info(key_manager: Optional[KeyManager], tx_info_prepare: TemplateInput) -> str:
    return construct_tx(key_manager, TxKind.TRANSFER_NFT, tx_info_prepare)


def prepare_withdraw_nft_tx_info(key_manager: Optional[KeyManager], tx_info_prepare: TemplateInput) -> str:
    return construct_tx(key_manager, TxKind.WITHDRAW_NFT, tx_info_prepare)


def prepare_offer_tx_info(
    key_manager: Optional[KeyManager], tx_info_prepare: TemplateInput, is_sell: bool
) -> str:
    return construct_tx(key_manager, TxKind.OFFER, tx_info_prepare, override_offer_side(is_sell))
