import base64

import pytest

from nft_market_sdk.key_manager import SeedKeyManager

SEED = "0x" + "11" * 32
OTHER_SEED = "0x" + "22" * 32
SELLER_SIG = base64.b64encode(bytes(range(64))).decode("ascii")


@pytest.fixture(scope="session")
def key_manager():
    return SeedKeyManager(SEED)


@pytest.fixture(scope="session")
def other_key_manager():
    return SeedKeyManager(OTHER_SEED)


@pytest.fixture
def create_collection_template():
    return {
        "AccountIndex": 3,
        "CollectionId": 7,
        "Name": "alice collection",
        "Introduction": "from the server",
        "GasAccountIndex": 1,
        "GasFeeAssetId": 0,
        "GasFeeAssetAmount": 10000,
        "ExpiredAt": 1654656781000,
        "Nonce": 4,
        "Sig": None,
    }


@pytest.fixture
def mint_nft_template():
    return {
        "CreatorAccountIndex": 3,
        "ToAccountIndex": 3,
        "ToAccountNameHash": "0a48e9892a45a04d0c5b0f235a3aeb07b92137ba71a59b9c457774bafde95983",
        "NftIndex": 12,
        "NftContentHash": "6bd4f0b51b3c1e7b2a6e54a0e5ec1bcb1a5f86c7b2b52d1a7c0f2b7d5b9c4f10",
        "NftCollectionId": 7,
        "CreatorTreasuryRate": 0,
        "GasAccountIndex": 1,
        "GasFeeAssetId": 0,
        "GasFeeAssetAmount": 10000,
        "ExpiredAt": 1654656781000,
        "Nonce": 5,
    }


@pytest.fixture
def transfer_nft_template():
    return {
        "FromAccountIndex": 3,
        "ToAccountIndex": 4,
        "ToAccountNameHash": "1c4b0ff3f1d1e7e6d0f7ee0b6f9b0b1f9c0e1a2b3c4d5e6f708192a3b4c5d6e7",
        "NftIndex": 12,
        "GasAccountIndex": 1,
        "GasFeeAssetId": 0,
        "GasFeeAssetAmount": 10000,
        "CallData": "",
        "CallDataHash": base64.b64encode(b"\x00" * 32).decode("ascii"),
        "ExpiredAt": 1654656781000,
        "Nonce": 6,
        "Sig": None,
    }


@pytest.fixture
def withdraw_nft_template():
    return {
        "AccountIndex": 3,
        "CreatorAccountIndex": 3,
        "CreatorAccountNameHash": base64.b64encode(b"\x01" * 32).decode("ascii"),
        "CreatorTreasuryRate": 0,
        "NftIndex": 12,
        "NftContentHash": base64.b64encode(b"\x02" * 32).decode("ascii"),
        "NftL1Address": "0x0000000000000000000000000000000000000000",
        "NftL1TokenId": "0",
        "CollectionId": 7,
        "ToAddress": "0x5761494e2C0B890dE64aa009AFE9596A5Fbf47A7",
        "GasAccountIndex": 1,
        "GasFeeAssetId": 0,
        "GasFeeAssetAmount": 10000,
        "ExpiredAt": 1654656781000,
        "Nonce": 7,
        "Sig": None,
    }


def make_offer(offer_type, account_index, sig=None, amount=1000000):
    return {
        "Type": offer_type,
        "OfferId": 9,
        "AccountIndex": account_index,
        "NftIndex": 12,
        "AssetId": 0,
        "AssetAmount": amount,
        "ListedAt": 1654656000000,
        "ExpiredAt": 1654656781000,
        "TreasuryRate": 200,
        "Sig": sig,
    }


@pytest.fixture
def offer_template():
    return make_offer(0, 3)


@pytest.fixture
def atomic_match_template():
    return {
        "AccountIndex": 3,
        "BuyOffer": make_offer(0, 3),
        "SellOffer": make_offer(1, 4, sig=SELLER_SIG),
        "GasAccountIndex": 1,
        "GasFeeAssetId": 0,
        "GasFeeAssetAmount": 10000,
        "CreatorAmount": 0,
        "TreasuryAmount": 0,
        "Nonce": 8,
        "ExpiredAt": 1654656781000,
        "Sig": None,
    }
