"""Group bundle filenames by character and variant."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from loguru import logger

from .parser import BundleKind, BundleName, parse


@dataclass
class BundleGroup:
    """All bundles (art / animation / prefab) sharing one character/variant."""

    character_name: str
    variant_id: str
    art: List[str] = field(default_factory=list)
    animation: List[str] = field(default_factory=list)
    prefab: List[str] = field(default_factory=list)

    @property
    def full_identifier(self) -> str:
        return f"{self.character_name}_{self.variant_id}"

    @property
    def files(self) -> List[str]:
        return [*self.art, *self.animation, *self.prefab]

    @property
    def is_complete(self) -> bool:
        return not self.missing_kinds()

    def missing_kinds(self) -> List[BundleKind]:
        return [kind for kind in BundleKind if not self.members(kind)]

    def members(self, kind: BundleKind) -> List[str]:
        return getattr(self, kind.value)

    def add(self, filename: str, kind: BundleKind) -> None:
        self.members(kind).append(filename)

    def to_dict(self) -> Dict[str, object]:
        return {
            "character_name": self.character_name,
            "variant_id": self.variant_id,
            "full_identifier": self.full_identifier,
            "art": list(self.art),
            "animation": list(self.animation),
            "prefab": list(self.prefab),
            "complete": self.is_complete,
        }


@dataclass
class GroupingResult:
    groups: Dict[str, BundleGroup] = field(default_factory=dict)
    unmatched: List[str] = field(default_factory=list)

    def find(self, character_name: Optional[str], variant_id: Optional[str]) -> Optional[BundleGroup]:
        if character_name is None or variant_id is None:
            return None
        return self.groups.get(_group_key(character_name, variant_id))

    def complete_groups(self) -> Dict[str, BundleGroup]:
        return {key: group for key, group in self.groups.items() if group.is_complete}

    def to_dict(self) -> Dict[str, object]:
        return {
            "groups": [group.to_dict() for group in self.groups.values()],
            "unmatched": list(self.unmatched),
        }


def _group_key(character_name: str, variant_id: str) -> str:
    return f"{character_name}_{variant_id}".lower()


def group_bundles(filenames: Iterable[str]) -> GroupingResult:
    """Group filenames by case-insensitive full identifier.

    Groups keep insertion order; the first filename seen for a group decides
    the displayed casing of its character name.
    """
    result = GroupingResult()
    for filename in filenames:
        parsed = parse(filename)
        if not isinstance(parsed, BundleName):
            logger.debug(f"未识别的文件名: {filename}")
            result.unmatched.append(filename)
            continue
        key = _group_key(parsed.character_name, parsed.variant_id)
        group = result.groups.get(key)
        if group is None:
            group = BundleGroup(character_name=parsed.character_name, variant_id=parsed.variant_id)
            result.groups[key] = group
        group.add(filename, parsed.kind)
        logger.debug(f"{filename} -> {group.full_identifier} ({parsed.kind.value})")
    return result


def filter_bundles(
    filenames: Iterable[str],
    character_name: Optional[str],
    variant_id: Optional[str],
) -> List[str]:
    """Return the filenames that belong to the given character/variant."""
    return [f for f in filenames if parse(f).matches_character(character_name, variant_id)]


def save_groups_to_json(result: GroupingResult, path: Union[str, Path]) -> Path:
    out = Path(path)
    if out.parent and not out.parent.exists():
        out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(result.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
    logger.info(f"分组结果已写入: {out}")
    return out
