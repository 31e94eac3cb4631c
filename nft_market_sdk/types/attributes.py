"""NFT attribute entries used when fingerprinting NFT content."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Property:
    name: str
    value: str


@dataclass(slots=True, frozen=True)
class Level:
    name: str
    value: int


@dataclass(slots=True, frozen=True)
class Stat:
    name: str
    value: int
