"""Bundle filename parsing.

Recognised naming conventions, tried in order (first match wins)::

    art_live2d_characters_{name}_{variant}.bundle
    build_animations2d_characters_{name}_{variant}.bundle
    build_prefabs_live2d_characters_char2d_{name}_{variant}.bundle
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

INVALID_TEXT = "Invalid"


class BundleKind(str, Enum):
    ART = "art"
    ANIMATION = "animation"
    PREFAB = "prefab"


NAMING_CONVENTIONS: Tuple[Tuple[BundleKind, re.Pattern], ...] = (
    (BundleKind.ART, re.compile(r"art_live2d_characters_([^_]+)_(\d+)\.bundle", re.IGNORECASE)),
    (BundleKind.ANIMATION, re.compile(r"build_animations2d_characters_([^_]+)_(\d+)\.bundle", re.IGNORECASE)),
    (BundleKind.PREFAB, re.compile(r"build_prefabs_live2d_characters_char2d_([^_]+)_(\d+)\.bundle", re.IGNORECASE)),
)


def _same_text(a: Optional[str], b: Optional[str]) -> bool:
    if a is None or b is None:
        return False
    return a.lower() == b.lower()


@dataclass(frozen=True)
class BundleName:
    """Successful parse: a character/variant pair and the convention that matched."""

    character_name: str
    variant_id: str
    kind: BundleKind

    is_valid = True

    @property
    def full_identifier(self) -> str:
        return f"{self.character_name}_{self.variant_id}"

    def matches_character(self, character_name: Optional[str], variant_id: Optional[str]) -> bool:
        return _same_text(self.character_name, character_name) and _same_text(self.variant_id, variant_id)

    def matches_parser(self, other) -> bool:
        if other is None or not other.is_valid:
            return False
        return self.matches_character(other.character_name, other.variant_id)

    def __str__(self) -> str:
        return self.full_identifier


@dataclass(frozen=True)
class InvalidBundleName:
    """Failed parse. Carries no name fields and never matches anything."""

    is_valid = False

    def matches_character(self, character_name: Optional[str], variant_id: Optional[str]) -> bool:
        return False

    def matches_parser(self, other) -> bool:
        return False

    def __str__(self) -> str:
        return INVALID_TEXT


ParsedBundleName = Union[BundleName, InvalidBundleName]

_INVALID = InvalidBundleName()


def parse(filename: Optional[str]) -> ParsedBundleName:
    """Match ``filename`` against the naming conventions.

    Never raises: empty, ``None`` or unrecognised input yields an
    :class:`InvalidBundleName`.
    """
    if not filename:
        return _INVALID
    for kind, pattern in NAMING_CONVENTIONS:
        match = pattern.search(filename)
        if match:
            return BundleName(character_name=match.group(1), variant_id=match.group(2), kind=kind)
    return _INVALID


class BundleNameParser:
    """Parses one bundle filename and exposes the extracted character/variant.

    Fields read as ``None`` when the filename did not match; check
    :attr:`is_valid` first.
    """

    __slots__ = ("_filename", "_result")

    def __init__(self, filename: Optional[str] = None) -> None:
        self._filename = filename
        self._result = parse(filename)

    @classmethod
    def try_parse(cls, filename: Optional[str]) -> Tuple[bool, "BundleNameParser"]:
        parser = cls(filename)
        return parser.is_valid, parser

    @property
    def filename(self) -> Optional[str]:
        return self._filename

    @property
    def result(self) -> ParsedBundleName:
        return self._result

    @property
    def is_valid(self) -> bool:
        return self._result.is_valid

    @property
    def character_name(self) -> Optional[str]:
        return self._result.character_name if isinstance(self._result, BundleName) else None

    @property
    def variant_id(self) -> Optional[str]:
        return self._result.variant_id if isinstance(self._result, BundleName) else None

    @property
    def kind(self) -> Optional[BundleKind]:
        return self._result.kind if isinstance(self._result, BundleName) else None

    @property
    def full_identifier(self) -> Optional[str]:
        return self._result.full_identifier if isinstance(self._result, BundleName) else None

    def matches_character(self, character_name: Optional[str], variant_id: Optional[str]) -> bool:
        """Case-insensitive check against a raw (name, variant) pair."""
        return self._result.matches_character(character_name, variant_id)

    def matches_parser(self, other: Optional["BundleNameParser"]) -> bool:
        """True when both sides are valid and share character and variant."""
        if not self.is_valid or other is None or not other.is_valid:
            return False
        return self.matches_character(other.character_name, other.variant_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BundleNameParser):
            return NotImplemented
        return self._result == other._result

    def __hash__(self) -> int:
        return hash(self._result)

    def __str__(self) -> str:
        return str(self._result)

    def __repr__(self) -> str:
        return f"BundleNameParser({self._filename!r})"


def try_parse(filename: Optional[str]) -> Tuple[bool, BundleNameParser]:
    return BundleNameParser.try_parse(filename)
