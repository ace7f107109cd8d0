"""Platform-preferred character substitution for candidates."""

from dataclasses import dataclass, field
import sys
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .types import Candidate

ALL = "ALL"
NONE = "NONE"
DEFAULT = "DEFAULT"

NORMALIZATION_POLICIES = {ALL, NONE, DEFAULT}


@dataclass(frozen=True)
class SubstitutionTable:
    """Exact-match rewrite rules applied left to right, longest source first."""

    rules: Mapping[str, str] = field(default_factory=dict, compare=False)
    _items: Tuple[Tuple[str, str], ...] = field(init=False, repr=False)
    _lengths: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        items = tuple(sorted(dict(self.rules).items()))
        if any(not source for source, _ in items):
            raise ValueError("substitution sources must be non-empty")
        lengths = sorted({len(source) for source, _ in items}, reverse=True)
        # Private copy so callers cannot mutate a shared table.
        object.__setattr__(self, "rules", MappingProxyType(dict(items)))
        object.__setattr__(self, "_items", items)
        object.__setattr__(self, "_lengths", tuple(lengths))

    def apply(self, text: str) -> str:
        """Return text with every matching source replaced."""

        if not self.rules:
            return text
        output = []
        index = 0
        while index < len(text):
            for length in self._lengths:
                source = text[index : index + length]
                if len(source) == length and source in self.rules:
                    output.append(self.rules[source])
                    index += length
                    break
            else:
                output.append(text[index])
                index += 1
        return "".join(output)


NO_SUBSTITUTIONS = SubstitutionTable()

# U+301C WAVE DASH -> U+FF5E FULLWIDTH TILDE
VENDOR_SUBSTITUTIONS = SubstitutionTable({"〜": "～"})

_PLATFORM_RULES = {
    "windows": VENDOR_SUBSTITUTIONS,
    "win32": VENDOR_SUBSTITUTIONS,
}


def current_platform() -> str:
    """Map sys.platform to a coarse platform name."""

    if sys.platform.startswith("win") or sys.platform == "cygwin":
        return "windows"
    if sys.platform == "darwin":
        return "mac"
    if sys.platform.startswith("linux"):
        return "linux"
    return "other"


def platform_default_rules(platform: Optional[str] = None) -> SubstitutionTable:
    """Resolve the substitution table used for the DEFAULT policy."""

    name = (platform or current_platform()).lower()
    return _PLATFORM_RULES.get(name, NO_SUBSTITUTIONS)


def validate_policy(policy: str) -> str:
    if policy not in NORMALIZATION_POLICIES:
        raise ValueError(f"unknown normalization policy: {policy}")
    return policy


class TextNormalizer:
    """Applies the substitution table selected by a normalization policy."""

    def __init__(
        self,
        default_rules: SubstitutionTable,
        all_rules: SubstitutionTable = VENDOR_SUBSTITUTIONS,
    ) -> None:
        self.default_rules = default_rules
        self.all_rules = all_rules

    def rules_for(self, policy: str) -> SubstitutionTable:
        if policy == ALL:
            return self.all_rules
        if policy == DEFAULT:
            return self.default_rules
        return NO_SUBSTITUTIONS

    def normalize_text(self, text: str, policy: str) -> str:
        return self.rules_for(policy).apply(text)

    def normalize_candidate(self, candidate: Candidate, policy: str) -> bool:
        """Rewrite candidate text in place; return True if it changed."""

        if candidate.is_immutable() or policy == NONE:
            return False
        text = self.normalize_text(candidate.text, policy)
        content_text = self.normalize_text(candidate.content_text, policy)
        if text == candidate.text and content_text == candidate.content_text:
            return False
        candidate.text = text
        candidate.content_text = content_text
        # The annotation described the text before rewriting.
        candidate.annotation_text = ""
        return True
