"""Example signing a sell offer template offline."""
import json

from nft_market_sdk import SeedKeyManager, prepare_offer_tx_info


def main() -> None:
    key_manager = SeedKeyManager("0x" + "11" * 32)
    template = {
        "Type": 0,
        "OfferId": 1,
        "AccountIndex": 3,
        "NftIndex": 12,
        "AssetId": 0,
        "AssetAmount": 1000000,
        "ListedAt": 1654656000000,
        "ExpiredAt": 1654656781000,
        "TreasuryRate": 200,
    }

    tx = prepare_offer_tx_info(key_manager, json.dumps(template), is_sell=True)

    print("Public key:", key_manager.public_key.hex())
    print("Signed offer:", tx)


if __name__ == "__main__":  # pragma: no cover - manual usage
    main()
