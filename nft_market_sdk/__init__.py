"""Python client for signing and submitting NFT marketplace transactions."""
from .client import NftMarketClient, NftMarketOptions, new_client
from .content_hash import ContentHasher, build_content_string, calculate_content_hash
from .decoder import decode_tx_template
from .errors import DecodeError, NftMarketSDKError, SerializeError, SigningError
from .key_manager import (
    KeyManager,
    PrivateKeyManager,
    SeedKeyManager,
    new_private_key_manager,
    new_seed_key_manager,
    sign_message,
)
from .offer_composer import prepare_atomic_match_with_tx
from .tx_constructor import (
    construct_tx,
    prepare_create_collection_tx_info,
    prepare_mint_nft_tx_info,
    prepare_offer_tx_info,
    prepare_transfer_nft_tx_info,
    prepare_withdraw_nft_tx_info,
)
from .types import OfferSide, TxKind

__all__ = [
    "ContentHasher",
    "DecodeError",
    "KeyManager",
    "NftMarketClient",
    "NftMarketOptions",
    "NftMarketSDKError",
    "OfferSide",
    "PrivateKeyManager",
    "SeedKeyManager",
    "SerializeError",
    "SigningError",
    "TxKind",
    "build_content_string",
    "calculate_content_hash",
    "construct_tx",
    "decode_tx_template",
    "new_client",
    "new_private_key_manager",
    "new_seed_key_manager",
    "prepare_atomic_match_with_tx",
    "prepare_create_collection_tx_info",
    "prepare_mint_nft_tx_info",
    "prepare_offer_tx_info",
    "prepare_transfer_nft_tx_info",
    "prepare_withdraw_nft_tx_info",
    "sign_message",
]
