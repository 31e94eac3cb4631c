"""Order-independent fingerprint of an NFT's name and attribute sets."""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from Crypto.Hash import keccak

from .errors import DecodeError
from .types.attributes import Level, Property, Stat
from .validation import to_int, to_str

logger = logging.getLogger(__name__)

AttributeInput = Union[str, bytes, Sequence[Any], None]


def _entry_pair(entry: Any, label: str) -> tuple:
    if isinstance(entry, (Property, Level, Stat)):
        return entry.name, entry.value
    if not isinstance(entry, Mapping):
        raise DecodeError.wrong_type(label, "entry", "object with Name and Value", entry)
    lowered = {str(key).lower(): value for key, value in entry.items()}
    for key in ("name", "value"):
        if key not in lowered:
            raise DecodeError.missing_field(label, key.capitalize())
    return lowered["name"], lowered["value"]


def _parse_attributes(
    raw: AttributeInput, label: str, coerce: Callable[[Any, str, str], Any]
) -> List[tuple]:
    if raw is None:
        return []
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise DecodeError.invalid_json(label, exc) from exc
        if raw is None:
            return []
    if isinstance(raw, Mapping) or not isinstance(raw, Iterable):
        raise DecodeError.wrong_type(label, label, "list", raw)

    pairs = []
    for entry in raw:
        name, value = _entry_pair(entry, label)
        pairs.append((to_str(name, label, "Name"), coerce(value, label, "Value")))
    return pairs


def _strict_int(value: Any, what: str, field_name: str) -> int:
    if isinstance(value, str):
        raise DecodeError.wrong_type(what, field_name, "integer", value)
    return to_int(value, what, field_name)


def _section(label: str, pairs: List[tuple]) -> str:
    if not pairs:
        return f" {label}: empty"
    # Duplicate names collapse to the last occurrence.
    collapsed: Dict[str, Any] = {}
    for name, value in pairs:
        collapsed[name] = value
    body = "".join(f"k:{name} v:{collapsed[name]}" for name in sorted(collapsed))
    return f" {label}: {body}"


def build_content_string(
    account_name: str,
    collection_id: int,
    nft_name: str,
    properties: AttributeInput,
    levels: AttributeInput,
    stats: AttributeInput,
) -> str:
    """Return the canonical content string that :func:`calculate_content_hash` digests."""

    property_pairs = _parse_attributes(properties, "PROPERTIES", to_str)
    level_pairs = _parse_attributes(levels, "LEVELS", _strict_int)
    stat_pairs = _parse_attributes(stats, "STATS", _strict_int)

    return (
        f"ACC:{account_name} CID:{collection_id} NFT:{nft_name}"
        + _section("PROPERTIES", property_pairs)
        + _section("LEVELS", level_pairs)
        + _section("STATS", stat_pairs)
    )


def calculate_content_hash(
    account_name: str,
    collection_id: int,
    nft_name: str,
    properties: AttributeInput = None,
    levels: AttributeInput = None,
    stats: AttributeInput = None,
) -> str:
    """Keccak-256 of the NFT content string, as lowercase hex."""

    content = build_content_string(account_name, collection_id, nft_name, properties, levels, stats)
    logger.debug("nft content: %s", content)
    return keccak.new(digest_bits=256, data=content.encode("utf-8")).hexdigest()


class ContentHasher:
    """Callable wrapper so orchestrators can swap the fingerprint function."""

    def hash(
        self,
        account_name: str,
        collection_id: int,
        nft_name: str,
        properties: AttributeInput = None,
        levels: AttributeInput = None,
        stats: AttributeInput = None,
    ) -> str:
        return calculate_content_hash(account_name, collection_id, nft_name, properties, levels, stats)

    __call__ = hash


def attributes_to_json(entries: Optional[Iterable[Any]]) -> str:
    """Serialise attribute entries back to the ``[{"Name": .., "Value": ..}]`` form."""

    payload = []
    for entry in entries or []:
        name, value = _entry_pair(entry, "attributes")
        payload.append({"Name": name, "Value": value})
    return json.dumps(payload, separators=(",", ":"))
