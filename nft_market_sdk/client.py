"""Public entry point for the NFT marketplace Python SDK."""
from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from .content_hash import AttributeInput, attributes_to_json, calculate_content_hash
from .errors import NftMarketSDKError
from .http import HttpClient, HttpRequestor
from .key_manager import KeyManager, SeedKeyManager, generate_seed, sign_message
from .offer_composer import prepare_atomic_match_with_tx
from .tx_constructor import (
    prepare_create_collection_tx_info,
    prepare_mint_nft_tx_info,
    prepare_offer_tx_info,
    prepare_transfer_nft_tx_info,
    prepare_withdraw_nft_tx_info,
)
from .types.sdk_results import CollectionParams, ContractAddresses, L2Account, Layer2BasicInfo
from .validation import validate_account_name, validate_amount, validate_index

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@dataclass(slots=True)
class NftMarketOptions:
    key_manager: Optional[KeyManager] = None
    nft_market_base_url: str = "https://test-legend-nft.zecrey.com"
    legend_base_url: str = "https://test-legend-app.zecrey.com"
    contract_addresses: Optional[ContractAddresses] = None
    http_requestor: Optional[HttpRequestor] = None
    clock: Callable[[], float] = time.time


def _bool_param(value: bool) -> str:
    return "true" if value else "false"


class NftMarketClient:
    """Fetches unsigned templates, signs them locally and submits the result."""

    def __init__(self, options: Optional[NftMarketOptions] = None, http_client: Optional[Any] = None) -> None:
        self.options = options or NftMarketOptions()
        self._http_client = http_client or HttpClient(self.options.http_requestor)
        self._nft_market_url = self.options.nft_market_base_url.rstrip("/")
        self._legend_url = self.options.legend_base_url.rstrip("/")

    @property
    def key_manager(self) -> Optional[KeyManager]:
        return self.options.key_manager

    def set_key_manager(self, key_manager: KeyManager) -> None:
        self.options.key_manager = key_manager

    def _require_key_manager(self) -> KeyManager:
        if self.options.key_manager is None:
            raise NftMarketSDKError.no_key_manager_error()
        return self.options.key_manager

    def _get(self, endpoint: str, params: Optional[Mapping[str, str]] = None, *, legend: bool = False) -> Any:
        base_url = self._legend_url if legend else self._nft_market_url
        return self._http_client.send_get_request(base_url, API_PREFIX, endpoint, params)

    def _post_form(self, endpoint: str, form: Mapping[str, str], *, legend: bool = False) -> Any:
        base_url = self._legend_url if legend else self._nft_market_url
        logger.debug("submitting %s", endpoint)
        return self._http_client.send_form_request(base_url, API_PREFIX, endpoint, form)

    def _post_action(self, action: str, input_body: Mapping[str, Any], request_query: str) -> Any:
        body = {
            "input": dict(input_body),
            "action": {"name": action},
            "session_variables": {"x-hasura-user-id": "x-hasura-role", "x-hasura-role": "admin"},
            "request_query": request_query,
        }
        return self._http_client.send_post_request(
            self._nft_market_url, API_PREFIX, f"/action/{action}", body
        )

    def _fetch_template(self, endpoint: str, params: Mapping[str, str]) -> str:
        payload = self._get(f"/preparetx/{endpoint}", params)
        if isinstance(payload, Mapping):
            template = payload.get("transtion", payload.get("transaction"))
            if isinstance(template, str):
                return template
        raise NftMarketSDKError.invalid_response_error(endpoint, payload)

    # Accounts

    def create_l2_account(self) -> L2Account:
        seed = generate_seed()
        return L2Account(seed=seed, public_key=SeedKeyManager(seed).public_key.hex())

    def get_layer2_basic_info(self) -> Layer2BasicInfo:
        payload = self._get("/info/getLayer2BasicInfo", legend=True)
        if not isinstance(payload, Mapping) or not isinstance(payload.get("contract_addresses"), list):
            raise NftMarketSDKError.invalid_response_error("getLayer2BasicInfo", payload)
        return Layer2BasicInfo(
            contract_addresses=[str(address) for address in payload["contract_addresses"]],
            block_committed=payload.get("block_committed"),
            block_verified=payload.get("block_verified"),
            total_transactions=payload.get("total_transactions"),
        )

    def resolve_contract_addresses(self) -> ContractAddresses:
        """Resolve contract addresses once and keep them on the options."""

        if self.options.contract_addresses is None:
            addresses = self.get_layer2_basic_info().contract_addresses
            if len(addresses) < 2:
                raise NftMarketSDKError.invalid_response_error("getLayer2BasicInfo", addresses)
            self.options.contract_addresses = ContractAddresses(addresses[0], addresses[1])
        return self.options.contract_addresses

    def apply_register_host(self, account_name: str, l2_pk: str, owner_addr: str) -> Any:
        return self._post_form(
            "/register/applyRegisterHost",
            {
                "account_name": validate_account_name(account_name),
                "l2_pk": l2_pk,
                "owner_addr": owner_addr,
            },
            legend=True,
        )

    # Collections

    def create_collection(
        self,
        account_name: str,
        short_name: str,
        category_id: str,
        creator_earning_rate: str,
        params: Optional[CollectionParams] = None,
    ) -> Any:
        key_manager = self._require_key_manager()
        account = validate_account_name(account_name)
        cp = params or CollectionParams()

        template = self._fetch_template("getPrepareCreateCollectionTxInfo", {"account_name": account})
        tx = prepare_create_collection_tx_info(key_manager, template, cp.description)

        return self._post_form(
            "/collection/createCollection",
            {
                "short_name": short_name,
                "category_id": category_id,
                "collection_url": cp.collection_url,
                "external_link": cp.external_link,
                "twitter_link": cp.twitter_link,
                "instagram_link": cp.instagram_link,
                "discord_link": cp.discord_link,
                "telegram_link": cp.telegram_link,
                "logo_image": cp.logo_image,
                "featured_image": cp.featured_image,
                "banner_image": cp.banner_image,
                "creator_earning_rate": creator_earning_rate,
                "payment_asset_ids": json.dumps(cp.payment_asset_ids),
                "transaction": tx,
            },
        )

    def update_collection(
        self,
        collection_id: str,
        account_name: str,
        name: str,
        params: Optional[CollectionParams] = None,
    ) -> Any:
        key_manager = self._require_key_manager()
        cp = params or CollectionParams()
        timestamp = int(self.options.clock())
        signature = sign_message(key_manager, f"{timestamp}update_collection")

        return self._post_form(
            "/collection/updateCollection",
            {
                "id": collection_id,
                "account_name": validate_account_name(account_name),
                "name": name,
                "collection_url": cp.collection_url,
                "description": cp.description,
                "category_id": "1",
                "external_link": cp.external_link,
                "twitter_link": cp.twitter_link,
                "instagram_link": cp.instagram_link,
                "telegram_link": cp.telegram_link,
                "discord_link": cp.discord_link,
                "logo_image": cp.logo_image,
                "featured_image": cp.featured_image,
                "banner_image": cp.banner_image,
                "timestamp": str(timestamp),
                "signature": signature,
            },
        )

    def get_collection_by_id(self, collection_id: int) -> Any:
        collection_id = validate_index(collection_id, "collection_id")
        query = (
            "query MyQuery {\n  actionGetCollectionById(collection_id: %d) {\n"
            "    collection {\n      account_name\n      banner_thumb\n    }\n  }\n}\n" % collection_id
        )
        return self._post_action("actionGetCollectionById", {"collection_id": collection_id}, query)

    def get_collections_by_account_index(self, account_index: int) -> Any:
        account_index = validate_index(account_index, "account_index")
        query = (
            "query MyQuery {\n  actionGetAccountCollections(account_index: %d) {\n"
            "    confirmedCollectionIdList\n    pendingCollections {\n      id\n      name\n"
            "      short_name\n      account_name\n      l2_collection_id\n      status\n    }\n  }\n}"
            % account_index
        )
        return self._post_action("actionGetAccountCollections", {"account_index": account_index}, query)

    # NFTs

    def mint_nft(
        self,
        account_name: str,
        collection_id: int,
        nft_url: str,
        name: str,
        description: str,
        media: str,
        properties: AttributeInput = None,
        levels: AttributeInput = None,
        stats: AttributeInput = None,
    ) -> Any:
        key_manager = self._require_key_manager()
        account = validate_account_name(account_name)
        collection_id = validate_index(collection_id, "collection_id")

        content_hash = calculate_content_hash(account, collection_id, name, properties, levels, stats)
        template = self._fetch_template(
            "getPrepareMintNftTxInfo",
            {
                "account_name": account,
                "collection_id": str(collection_id),
                "name": name,
                "content_hash": content_hash,
            },
        )
        tx = prepare_mint_nft_tx_info(key_manager, template)

        return self._post_form(
            "/asset/createAsset",
            {
                "collection_id": str(collection_id),
                "nft_url": nft_url,
                "name": name,
                "description": description,
                "media": media,
                "properties": _attributes_form_value(properties),
                "levels": _attributes_form_value(levels),
                "stats": _attributes_form_value(stats),
                "transaction": tx,
            },
        )

    def get_nft_by_nft_id(self, nft_id: int) -> Any:
        nft_id = validate_index(nft_id, "nft_id")
        query = (
            "query MyQuery {\n  actionGetAssetByAssetId(asset_id: %d) {\n    asset {\n"
            "      account_name\n      collection_id\n      content_hash\n      description\n"
            "      id\n      levels\n      media\n      name\n      nft_index\n"
            "      properties\n      stats\n      status\n    }\n  }\n}\n" % nft_id
        )
        return self._post_action("actionGetAssetByAssetId", {"asset_id": nft_id}, query)

    def transfer_nft(self, asset_id: int, account_name: str, to_account_name: str) -> Any:
        key_manager = self._require_key_manager()
        asset_id = validate_index(asset_id, "asset_id")
        template = self._fetch_template(
            "getPrepareTransferNftTxInfo",
            {
                "account_name": validate_account_name(account_name),
                "to_account_name": validate_account_name(to_account_name),
                "nft_id": str(asset_id),
            },
        )
        tx = prepare_transfer_nft_tx_info(key_manager, template)
        return self._post_form("/asset/sendTransferNft", {"asset_id": str(asset_id), "transaction": tx})

    def withdraw_nft(self, account_name: str, asset_id: int) -> Any:
        key_manager = self._require_key_manager()
        asset_id = validate_index(asset_id, "asset_id")
        template = self._fetch_template(
            "getPrepareWithdrawNftTxInfo",
            {"account_name": validate_account_name(account_name), "nft_id": str(asset_id)},
        )
        tx = prepare_withdraw_nft_tx_info(key_manager, template)
        return self._post_form("/asset/sendWithdrawNft", {"asset_id": str(asset_id), "transaction": tx})

    # Offers

    def _list_offer(self, account_name: str, asset_id: int, money_type: int, amount: int, is_sell: bool) -> Any:
        key_manager = self._require_key_manager()
        account = validate_account_name(account_name)
        template = self._fetch_template(
            "getPrepareOfferTxInfo",
            {
                "account_name": account,
                "nft_id": str(validate_index(asset_id, "asset_id")),
                "money_id": str(validate_index(money_type, "money_type")),
                "money_amount": str(validate_amount(amount, "asset_amount")),
                "is_sell": _bool_param(is_sell),
            },
        )
        tx = prepare_offer_tx_info(key_manager, template, is_sell)
        return self.offer(account, tx)

    def sell_nft(self, account_name: str, asset_id: int, money_type: int, asset_amount: int) -> Any:
        return self._list_offer(account_name, asset_id, money_type, asset_amount, True)

    def buy_nft(self, account_name: str, asset_id: int, money_type: int, asset_amount: int) -> Any:
        return self._list_offer(account_name, asset_id, money_type, asset_amount, False)

    def offer(self, account_name: str, tx: str) -> Any:
        return self._post_form("/offer/listOffer", {"accountName": account_name, "transaction": tx})

    def get_next_offer_id(self, account_name: str) -> Any:
        return self._get("/offer/getNextOfferId", {"account_name": validate_account_name(account_name)})

    def get_offer_by_id(self, offer_id: int) -> Any:
        return self._get("/offer/getOfferByOfferId", {"offer_id": str(validate_index(offer_id, "offer_id"))})

    def accept_offer(self, account_name: str, offer_id: int, is_sell: bool, asset_amount: int) -> Any:
        key_manager = self._require_key_manager()
        offer_id = validate_index(offer_id, "offer_id")
        amount = validate_amount(asset_amount, "asset_amount")
        template = self._fetch_template(
            "getPrepareAtomicMatchWithTx",
            {
                "account_name": validate_account_name(account_name),
                "offer_id": str(offer_id),
                "money_id": "0",
                "money_amount": str(amount),
                "is_sell": _bool_param(is_sell),
            },
        )
        tx = prepare_atomic_match_with_tx(key_manager, template, is_sell, amount)
        return self._post_form("/offer/acceptOffer", {"id": str(offer_id), "transaction": tx})


def _attributes_form_value(value: Union[str, bytes, Sequence[Any], None]) -> str:
    if value is None:
        return "[]"
    if isinstance(value, bytes):
        return value.decode("utf-8")
    if isinstance(value, str):
        return value
    return attributes_to_json(value)


def new_client(seed: str, options: Optional[NftMarketOptions] = None) -> NftMarketClient:
    """Build a client signing with the key derived from ``seed``."""

    client = NftMarketClient(options)
    client.set_key_manager(SeedKeyManager(seed))
    return client
