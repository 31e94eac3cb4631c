import json

import pytest

from nft_market_sdk.client import NftMarketClient, NftMarketOptions, new_client
from nft_market_sdk.content_hash import calculate_content_hash
from nft_market_sdk.errors import NftMarketSDKError
from nft_market_sdk.key_manager import sign_message
from nft_market_sdk.types.sdk_results import CollectionParams, ContractAddresses


class RecordingHttpClient:
    def __init__(self, *, get_responses=None, form_responses=None, post_responses=None):
        self.get_calls = []
        self.form_calls = []
        self.post_calls = []
        self._get_responses = get_responses or {}
        self._form_responses = form_responses or {}
        self._post_responses = post_responses or {}

    def send_get_request(self, base_url, base_path, endpoint, params=None):
        self.get_calls.append((base_url, base_path, endpoint, params or {}))
        try:
            return self._get_responses[endpoint]
        except KeyError as exc:  # pragma: no cover - sanity guard
            raise AssertionError(f"Unexpected GET endpoint {endpoint}") from exc

    def send_form_request(self, base_url, base_path, endpoint, form):
        self.form_calls.append((base_url, base_path, endpoint, form))
        return self._form_responses.get(endpoint, {"ok": True})

    def send_post_request(self, base_url, base_path, endpoint, body):
        self.post_calls.append((base_url, base_path, endpoint, body))
        return self._post_responses.get(endpoint, {})


def _client(key_manager, http_client, **options):
    return NftMarketClient(
        NftMarketOptions(key_manager=key_manager, nft_market_base_url="https://market.example/", **options),
        http_client=http_client,
    )


def test_create_collection_signs_with_caller_description(key_manager, create_collection_template):
    http_client = RecordingHttpClient(
        get_responses={
            "/preparetx/getPrepareCreateCollectionTxInfo": {"transtion": json.dumps(create_collection_template)}
        }
    )
    client = _client(key_manager, http_client)

    result = client.create_collection(
        " alice ", "swords", "1", "200", CollectionParams(description="mine", payment_asset_ids=[0, 1])
    )

    assert result == {"ok": True}
    assert http_client.get_calls[0] == (
        "https://market.example",
        "/api/v1",
        "/preparetx/getPrepareCreateCollectionTxInfo",
        {"account_name": "alice"},
    )
    (_, _, endpoint, form) = http_client.form_calls[0]
    assert endpoint == "/collection/createCollection"
    assert form["payment_asset_ids"] == "[0, 1]"
    assert json.loads(form["transaction"])["Introduction"] == "mine"


def test_mint_nft_sends_content_hash(key_manager, mint_nft_template):
    http_client = RecordingHttpClient(
        get_responses={"/preparetx/getPrepareMintNftTxInfo": {"transaction": json.dumps(mint_nft_template)}}
    )
    client = _client(key_manager, http_client)
    properties = '[{"Name":"rarity","Value":"epic"}]'

    client.mint_nft("alice", 7, "https://nft.example/1", "Sword", "a sword", "media", properties, "[]", "[]")

    params = http_client.get_calls[0][3]
    assert params["content_hash"] == calculate_content_hash("alice", 7, "Sword", properties, "[]", "[]")
    assert params["collection_id"] == "7"
    form = http_client.form_calls[0][3]
    assert form["properties"] == properties
    assert form["levels"] == "[]"
    assert json.loads(form["transaction"])["NftIndex"] == 12


def test_sell_and_buy_set_offer_side(key_manager, offer_template):
    http_client = RecordingHttpClient(
        get_responses={"/preparetx/getPrepareOfferTxInfo": {"transtion": json.dumps(offer_template)}}
    )
    client = _client(key_manager, http_client)

    client.sell_nft("alice", 12, 0, 1000000)
    client.buy_nft("alice", 12, 0, 1000000)

    assert http_client.get_calls[0][3]["is_sell"] == "true"
    assert http_client.get_calls[1][3]["is_sell"] == "false"
    sold, bought = (json.loads(call[3]["transaction"]) for call in http_client.form_calls)
    assert sold["Type"] == 1
    assert bought["Type"] == 0
    assert http_client.form_calls[0][2] == "/offer/listOffer"
    assert http_client.form_calls[0][3]["accountName"] == "alice"


def test_accept_offer_submits_composite(key_manager, atomic_match_template):
    http_client = RecordingHttpClient(
        get_responses={"/preparetx/getPrepareAtomicMatchWithTx": {"transtion": json.dumps(atomic_match_template)}}
    )
    client = _client(key_manager, http_client)

    client.accept_offer("alice", 9, False, 2500000)

    params = http_client.get_calls[0][3]
    assert params["money_amount"] == "2500000"
    assert params["money_id"] == "0"
    (_, _, endpoint, form) = http_client.form_calls[0]
    assert endpoint == "/offer/acceptOffer"
    assert form["id"] == "9"
    assert json.loads(form["transaction"])["BuyOffer"]["AssetAmount"] == 2500000


def test_transfer_and_withdraw(key_manager, transfer_nft_template, withdraw_nft_template):
    http_client = RecordingHttpClient(
        get_responses={
            "/preparetx/getPrepareTransferNftTxInfo": {"transtion": json.dumps(transfer_nft_template)},
            "/preparetx/getPrepareWithdrawNftTxInfo": {"transtion": json.dumps(withdraw_nft_template)},
        }
    )
    client = _client(key_manager, http_client)

    client.transfer_nft(12, "alice", "bob")
    client.withdraw_nft("alice", 12)

    assert http_client.get_calls[0][3] == {"account_name": "alice", "to_account_name": "bob", "nft_id": "12"}
    assert [call[2] for call in http_client.form_calls] == ["/asset/sendTransferNft", "/asset/sendWithdrawNft"]


def test_update_collection_signs_timestamped_message(key_manager):
    http_client = RecordingHttpClient()
    client = _client(key_manager, http_client, clock=lambda: 1654656781.9)

    client.update_collection("5", "alice", "swords")

    form = http_client.form_calls[0][3]
    assert form["timestamp"] == "1654656781"
    assert form["signature"] == sign_message(key_manager, "1654656781update_collection")


def test_signing_operations_require_key_manager():
    client = NftMarketClient(NftMarketOptions(), http_client=RecordingHttpClient())
    with pytest.raises(NftMarketSDKError) as excinfo:
        client.transfer_nft(1, "alice", "bob")
    assert excinfo.value.code == "NO_KEY_MANAGER"


def test_template_response_without_transaction_raises(key_manager):
    http_client = RecordingHttpClient(get_responses={"/preparetx/getPrepareWithdrawNftTxInfo": {"foo": 1}})
    client = _client(key_manager, http_client)
    with pytest.raises(NftMarketSDKError) as excinfo:
        client.withdraw_nft("alice", 1)
    assert excinfo.value.code == "INVALID_RESPONSE"


def test_resolve_contract_addresses_is_cached(key_manager):
    http_client = RecordingHttpClient(
        get_responses={"/info/getLayer2BasicInfo": {"contract_addresses": ["0xaaa", "0xbbb"]}}
    )
    client = _client(key_manager, http_client)

    first = client.resolve_contract_addresses()
    second = client.resolve_contract_addresses()

    assert first == ContractAddresses("0xaaa", "0xbbb")
    assert second is first
    assert len(http_client.get_calls) == 1
    assert http_client.get_calls[0][0] == "https://test-legend-app.zecrey.com"


def test_action_queries_post_json(key_manager):
    http_client = RecordingHttpClient(post_responses={"/action/actionGetAssetByAssetId": {"asset": {"id": 3}}})
    client = _client(key_manager, http_client)

    assert client.get_nft_by_nft_id(3) == {"asset": {"id": 3}}
    body = http_client.post_calls[0][3]
    assert body["input"] == {"asset_id": 3}
    assert body["action"] == {"name": "actionGetAssetByAssetId"}


def test_new_client_and_l2_account():
    client = new_client("0x" + "33" * 32, NftMarketOptions(http_requestor=lambda url, kwargs: None))
    account = client.create_l2_account()
    assert account.seed.startswith("0x") and len(account.seed) == 66
    assert len(account.public_key) == 64
    assert client.key_manager is not None
