import pytest

from nft_market_sdk import validation
from nft_market_sdk.errors import DecodeError, NftMarketSDKError


def test_to_int_accepts_numbers_and_decimal_strings():
    assert validation.to_int(5, "Offer", "AssetAmount") == 5
    assert validation.to_int("123456789012345678901234567890", "Offer", "AssetAmount") == 123456789012345678901234567890


def test_to_int_rejects_booleans_and_floats():
    with pytest.raises(DecodeError):
        validation.to_int(True, "Offer", "AssetAmount")
    with pytest.raises(DecodeError):
        validation.to_int(1.0, "Offer", "AssetAmount")


def test_validate_account_name():
    assert validation.validate_account_name(" alice ") == "alice"
    with pytest.raises(NftMarketSDKError):
        validation.validate_account_name("")


def test_validate_amount_negative():
    with pytest.raises(NftMarketSDKError):
        validation.validate_amount(-1, "asset_amount")
