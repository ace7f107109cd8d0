"""Shared data types for conversion candidates and requests."""

from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

USER_DICTIONARY = "USER_DICTIONARY"
NO_MODIFICATION = "NO_MODIFICATION"
SPELLING_CORRECTION = "SPELLING_CORRECTION"
NO_LEARNING = "NO_LEARNING"

PROVENANCE_MARKERS = {USER_DICTIONARY, NO_MODIFICATION, SPELLING_CORRECTION, NO_LEARNING}
IMMUTABLE_MARKERS = frozenset({USER_DICTIONARY, NO_MODIFICATION})


@dataclass
class Candidate:
    """One proposed output string for a segment."""

    key: str = ""
    text: str = ""
    content_key: str = ""
    content_text: str = ""
    annotation_text: str = ""
    provenance: Set[str] = field(default_factory=set)

    def is_immutable(self) -> bool:
        """Return True if a provenance marker forbids rewriting."""

        return bool(self.provenance & IMMUTABLE_MARKERS)


@dataclass
class Segment:
    """A slice of the input with its own ranked candidate list."""

    key: str = ""
    candidates: List[Candidate] = field(default_factory=list)

    def add_candidate(self, text: str, annotation_text: str = "") -> Candidate:
        candidate = Candidate(
            key=self.key,
            text=text,
            content_key=self.key,
            content_text=text,
            annotation_text=annotation_text,
        )
        self.candidates.append(candidate)
        return candidate

    def erase_candidate(self, index: int) -> None:
        del self.candidates[index]

    def candidates_size(self) -> int:
        return len(self.candidates)


@dataclass
class Segments:
    """Ordered segments; the leading history segments are already committed."""

    segments: List[Segment] = field(default_factory=list)
    history_segments_size: int = 0

    def add_segment(self, key: str = "") -> Segment:
        segment = Segment(key=key)
        self.segments.append(segment)
        return segment

    def conversion_segments(self) -> List[Segment]:
        """Return the segments still open for conversion."""

        return self.segments[self.history_segments_size:]

    def conversion_segment(self, index: int) -> Segment:
        return self.conversion_segments()[index]

    def clear(self) -> None:
        self.segments.clear()
        self.history_segments_size = 0


@dataclass(frozen=True)
class ConversionRequest:
    """Request metadata declared by the client environment."""

    additional_renderable_character_groups: Tuple[str, ...] = ()


@dataclass
class FilterStats:
    """Counters collected during one filtering pass."""

    segments: int = 0
    candidates_seen: int = 0
    removed: Dict[str, int] = field(default_factory=dict)
    normalized: int = 0
    normalization_policy: str = ""

    @property
    def removed_total(self) -> int:
        return sum(self.removed.values())

    @property
    def changed(self) -> bool:
        return self.removed_total > 0 or self.normalized > 0

    def count_removal(self, reason: str) -> None:
        self.removed[reason] = self.removed.get(reason, 0) + 1
