"""Atomic match composition: sign one side's offer, then the whole match."""
from __future__ import annotations

import dataclasses
import logging
from typing import Optional

from .decoder import TemplateInput, decode_tx_template
from .encoding import serialize_tx
from .errors import SerializeError
from .key_manager import KeyManager
from .mimc import FIELD_MODULUS
from .tx_constructor import construct_tx, sign_template
from .types.txs import AtomicMatchTxInfo, OfferTxInfo, TxKind

logger = logging.getLogger(__name__)


def sign_offer(key_manager: Optional[KeyManager], offer: OfferTxInfo) -> OfferTxInfo:
    """Sign ``offer`` through the Offer pipeline and decode the signed result."""

    signed_tx = construct_tx(key_manager, TxKind.OFFER, offer)
    return decode_tx_template(TxKind.OFFER, signed_tx)


def compose_atomic_match(
    key_manager: Optional[KeyManager],
    template: AtomicMatchTxInfo,
    is_sell: bool,
    asset_amount: int,
) -> AtomicMatchTxInfo:
    """Return the signed composite for the acting side.

    The acting side's offer is signed with its template amount and only then
    has ``asset_amount`` written into it, so that offer's own signature covers
    the pre-negotiation amount while the composite signature covers the
    negotiated one. The other side's offer is carried over untouched.
    """

    if is_sell:
        signed_offer = sign_offer(key_manager, template.sell_offer)
        composite = dataclasses.replace(
            template, sell_offer=dataclasses.replace(signed_offer, asset_amount=asset_amount)
        )
    else:
        signed_offer = sign_offer(key_manager, template.buy_offer)
        composite = dataclasses.replace(
            template, buy_offer=dataclasses.replace(signed_offer, asset_amount=asset_amount)
        )
    return sign_template(key_manager, TxKind.ATOMIC_MATCH, composite)


def prepare_atomic_match_with_tx(
    key_manager: Optional[KeyManager],
    tx_info_prepare: TemplateInput,
    is_sell: bool,
    asset_amount: int,
) -> str:
    if isinstance(asset_amount, bool) or not isinstance(asset_amount, int) or not 0 <= asset_amount < FIELD_MODULUS:
        raise SerializeError.field_out_of_range("AssetAmount", asset_amount)
    template = decode_tx_template(TxKind.ATOMIC_MATCH, tx_info_prepare)
    signed = compose_atomic_match(key_manager, template, is_sell, asset_amount)
    logger.debug("signed atomic match as %s", "seller" if is_sell else "buyer")
    return serialize_tx(signed)
