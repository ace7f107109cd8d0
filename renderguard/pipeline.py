"""Candidate filter pipeline: control check, render check, normalize."""

from typing import Optional, Union

from .audit import AuditLogger
from .character_groups import CapabilityRequest, is_renderable
from .control import contains_forbidden_control
from .normalize import (
    DEFAULT,
    SubstitutionTable,
    TextNormalizer,
    platform_default_rules,
    validate_policy,
)
from .types import Candidate, ConversionRequest, FilterStats, Segments

CONTROL_CHARACTER = "CONTROL_CHARACTER"
UNRENDERABLE = "UNRENDERABLE"


def _as_capabilities(
    request: Union[ConversionRequest, CapabilityRequest, None]
) -> CapabilityRequest:
    if isinstance(request, CapabilityRequest):
        return request
    return CapabilityRequest.from_request(request)


def rejection_reason(candidate: Candidate, capabilities: CapabilityRequest) -> Optional[str]:
    """Return why a candidate must be removed, or None to keep it."""

    if contains_forbidden_control(candidate.text):
        return CONTROL_CHARACTER
    if not is_renderable(candidate.text, capabilities):
        return UNRENDERABLE
    return None


class EnvironmentalFilter:
    """Drops candidates the client cannot show and rewrites the rest."""

    def __init__(
        self,
        default_rules: Optional[SubstitutionTable] = None,
        audit_logger: Optional[AuditLogger] = None,
    ) -> None:
        """Without default_rules, the host platform table is resolved once here."""

        if default_rules is None:
            default_rules = platform_default_rules()
        self.normalizer = TextNormalizer(default_rules=default_rules)
        self.audit_logger = audit_logger
        self._policy = DEFAULT

    @property
    def normalization_policy(self) -> str:
        return self._policy

    def set_normalization_policy(self, policy: str) -> None:
        """Override the policy; set once before filtering."""

        self._policy = validate_policy(policy)

    def run(
        self,
        request: Union[ConversionRequest, CapabilityRequest, None],
        segments: Segments,
    ) -> FilterStats:
        """Filter all conversion segments in place and return pass statistics."""

        capabilities = _as_capabilities(request)
        stats = FilterStats(normalization_policy=self._policy)
        for segment in segments.conversion_segments():
            stats.segments += 1
            for index in range(segment.candidates_size() - 1, -1, -1):
                candidate = segment.candidates[index]
                stats.candidates_seen += 1
                reason = rejection_reason(candidate, capabilities)
                if reason is not None:
                    segment.erase_candidate(index)
                    stats.count_removal(reason)
                    continue
                if self.normalizer.normalize_candidate(candidate, self._policy):
                    stats.normalized += 1

        if self.audit_logger is not None:
            self.audit_logger.log(stats)
        return stats

    def rewrite(
        self,
        request: Union[ConversionRequest, CapabilityRequest, None],
        segments: Segments,
    ) -> bool:
        """Filter segments in place; return True if anything changed."""

        return self.run(request, segments).changed


def filter_segments(
    segments: Segments,
    capabilities: CapabilityRequest,
    policy: str = DEFAULT,
    default_rules: Optional[SubstitutionTable] = None,
) -> bool:
    """Run one filtering pass with an explicit policy."""

    environmental_filter = EnvironmentalFilter(default_rules=default_rules)
    environmental_filter.set_normalization_policy(policy)
    return environmental_filter.rewrite(capabilities, segments)
