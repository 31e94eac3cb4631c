import json
import re

import pytest

from nft_market_sdk.content_hash import (
    ContentHasher,
    attributes_to_json,
    build_content_string,
    calculate_content_hash,
)
from nft_market_sdk.errors import DecodeError
from nft_market_sdk.types import Level, Property, Stat


def test_end_to_end_content_string_and_hash():
    properties = '[{"Name":"rarity","Value":"epic"}]'
    content = build_content_string("alice", 7, "Sword", properties, "[]", "[]")
    assert content == "ACC:alice CID:7 NFT:Sword PROPERTIES: k:rarity v:epic LEVELS: empty STATS: empty"

    first = calculate_content_hash("alice", 7, "Sword", properties, "[]", "[]")
    second = calculate_content_hash("alice", 7, "Sword", properties, "[]", "[]")
    assert first == second
    assert re.fullmatch(r"[0-9a-f]{64}", first)


def test_empty_lists_use_placeholders_in_order():
    content = build_content_string("bob", 1, "Shield", "[]", "[]", "[]")
    assert content.endswith(" PROPERTIES: empty LEVELS: empty STATS: empty")


def test_hash_is_order_independent():
    forward = [{"Name": "a", "Value": "1"}, {"Name": "b", "Value": "2"}]
    backward = [{"Name": "b", "Value": "2"}, {"Name": "a", "Value": "1"}]
    assert calculate_content_hash("alice", 7, "Sword", forward) == calculate_content_hash(
        "alice", 7, "Sword", backward
    )


def test_hash_ignores_json_key_order():
    first = '[{"Name":"power","Value":3}]'
    second = '[{"Value":3,"Name":"power"}]'
    assert calculate_content_hash("alice", 7, "Sword", "[]", first) == calculate_content_hash(
        "alice", 7, "Sword", "[]", second
    )


@pytest.mark.parametrize(
    "properties, levels, stats",
    [
        ('[{"Name":"rarity","Value":"rare"}]', "[]", "[]"),
        ('[{"Name":"rarity","Value":"epic"}]', '[{"Name":"power","Value":1}]', "[]"),
        ('[{"Name":"rarity","Value":"epic"}]', "[]", '[{"Name":"speed","Value":2}]'),
    ],
)
def test_hash_changes_with_any_attribute(properties, levels, stats):
    baseline = calculate_content_hash("alice", 7, "Sword", '[{"Name":"rarity","Value":"epic"}]', "[]", "[]")
    assert calculate_content_hash("alice", 7, "Sword", properties, levels, stats) != baseline


def test_sections_are_sorted_and_unseparated():
    levels = [{"Name": "b", "Value": 2}, {"Name": "a", "Value": 1}]
    content = build_content_string("alice", 7, "Sword", [], levels, [])
    assert " LEVELS: k:a v:1k:b v:2 STATS: empty" in content


def test_duplicate_names_collapse_to_last_value():
    properties = [{"Name": "color", "Value": "red"}, {"Name": "color", "Value": "blue"}]
    content = build_content_string("alice", 7, "Sword", properties, [], [])
    assert "PROPERTIES: k:color v:blue LEVELS" in content


def test_accepts_attribute_objects():
    parsed = build_content_string(
        "alice", 7, "Sword", [Property("rarity", "epic")], [Level("power", 3)], [Stat("speed", 9)]
    )
    raw = build_content_string(
        "alice",
        7,
        "Sword",
        '[{"Name":"rarity","Value":"epic"}]',
        '[{"Name":"power","Value":3}]',
        '[{"Name":"speed","Value":9}]',
    )
    assert parsed == raw


def test_content_hasher_matches_function():
    hasher = ContentHasher()
    assert hasher("alice", 7, "Sword") == calculate_content_hash("alice", 7, "Sword", "[]", "[]", "[]")


@pytest.mark.parametrize(
    "properties, levels, stats",
    [
        ("not json", "[]", "[]"),
        ('{"Name":"rarity"}', "[]", "[]"),
        ('[{"Name":"rarity","Value":5}]', "[]", "[]"),
        ("[]", '[{"Name":"power","Value":"5"}]', "[]"),
        ("[]", "[]", '[{"Name":"speed"}]'),
        ("[]", "[]", '[{"Name":"speed","Value":true}]'),
    ],
)
def test_invalid_attributes_raise_decode_error(properties, levels, stats):
    with pytest.raises(DecodeError):
        calculate_content_hash("alice", 7, "Sword", properties, levels, stats)


def test_attributes_to_json_round_trips_entries():
    encoded = attributes_to_json([Property("rarity", "epic")])
    assert json.loads(encoded) == [{"Name": "rarity", "Value": "epic"}]
