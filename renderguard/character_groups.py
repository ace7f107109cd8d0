"""Character group classification for render-capability checks."""

from bisect import bisect_right
from dataclasses import dataclass
from functools import lru_cache
from typing import FrozenSet, Iterable, List, Optional, Tuple

from .types import ConversionRequest

EMPTY = "EMPTY"
KANA_SUPPLEMENT_6_0 = "KANA_SUPPLEMENT_6_0"
KANA_SUPPLEMENT_AND_KANA_EXTENDED_A_10_0 = "KANA_SUPPLEMENT_AND_KANA_EXTENDED_A_10_0"
KANA_EXTENDED_A_14_0 = "KANA_EXTENDED_A_14_0"

CHARACTER_GROUPS = frozenset(
    {
        EMPTY,
        KANA_SUPPLEMENT_6_0,
        KANA_SUPPLEMENT_AND_KANA_EXTENDED_A_10_0,
        KANA_EXTENDED_A_14_0,
    }
)

# Inclusive code point ranges. Anything not listed is always renderable.
_GROUP_RANGES: List[Tuple[int, int, str]] = [
    (0x1B000, 0x1B001, KANA_SUPPLEMENT_6_0),
    (0x1B002, 0x1B11E, KANA_SUPPLEMENT_AND_KANA_EXTENDED_A_10_0),
    (0x1B11F, 0x1B122, KANA_EXTENDED_A_14_0),
]


@dataclass(frozen=True)
class GroupTable:
    """Sorted, disjoint range table searched with bisect."""

    starts: Tuple[int, ...]
    ends: Tuple[int, ...]
    groups: Tuple[str, ...]

    def lookup(self, codepoint: int) -> Optional[str]:
        index = bisect_right(self.starts, codepoint) - 1
        if index < 0 or codepoint > self.ends[index]:
            return None
        return self.groups[index]


def build_group_table(ranges: Iterable[Tuple[int, int, str]]) -> GroupTable:
    """Validate ranges and build a lookup table."""

    ordered = sorted(ranges)
    previous_end = -1
    for start, end, group in ordered:
        if start > end:
            raise ValueError(f"invalid range U+{start:04X}..U+{end:04X}")
        if start <= previous_end:
            raise ValueError(f"range U+{start:04X}..U+{end:04X} overlaps a previous range")
        if group not in CHARACTER_GROUPS or group == EMPTY:
            raise ValueError(f"unknown character group: {group}")
        previous_end = end
    return GroupTable(
        starts=tuple(start for start, _, _ in ordered),
        ends=tuple(end for _, end, _ in ordered),
        groups=tuple(group for _, _, group in ordered),
    )


@lru_cache(maxsize=None)
def default_group_table() -> GroupTable:
    """Return the shared process-wide group table."""

    return build_group_table(_GROUP_RANGES)


def classify(codepoint: int) -> Optional[str]:
    """Return the character group of a code point, or None if ungrouped."""

    return default_group_table().lookup(codepoint)


@dataclass(frozen=True)
class CapabilityRequest:
    """Character groups the client can render beyond the baseline."""

    enabled_groups: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        unknown = set(self.enabled_groups) - CHARACTER_GROUPS
        if unknown:
            raise ValueError(f"unknown character groups: {sorted(unknown)}")

    @classmethod
    def from_groups(cls, groups: Iterable[str]) -> "CapabilityRequest":
        return cls(enabled_groups=frozenset(groups))

    @classmethod
    def from_request(cls, request: Optional[ConversionRequest]) -> "CapabilityRequest":
        """Derive capabilities from the request's declared groups."""

        if request is None:
            return cls()
        # Codes unknown to this build unlock nothing, like EMPTY.
        return cls.from_groups(
            group
            for group in request.additional_renderable_character_groups
            if group in CHARACTER_GROUPS
        )

    def allows(self, group: Optional[str]) -> bool:
        if group is None:
            return True
        # EMPTY never classifies a character, so it unlocks nothing.
        return group != EMPTY and group in self.enabled_groups


def is_renderable(text: str, capabilities: CapabilityRequest) -> bool:
    """Return True if every character of text can be rendered."""

    table = default_group_table()
    for ch in text:
        if not capabilities.allows(table.lookup(ord(ch))):
            return False
    return True
