from .audit import AuditLogger
from .character_groups import (
    EMPTY,
    KANA_EXTENDED_A_14_0,
    KANA_SUPPLEMENT_6_0,
    KANA_SUPPLEMENT_AND_KANA_EXTENDED_A_10_0,
    CapabilityRequest,
    classify,
    is_renderable,
)
from .config import ConfigError, FilterConfig, load_config
from .control import contains_forbidden_control
from .normalize import (
    ALL,
    DEFAULT,
    NONE,
    SubstitutionTable,
    TextNormalizer,
    platform_default_rules,
)
from .pipeline import EnvironmentalFilter, filter_segments
from .types import (
    NO_MODIFICATION,
    USER_DICTIONARY,
    Candidate,
    ConversionRequest,
    FilterStats,
    Segment,
    Segments,
)

__all__ = [
    "ALL",
    "AuditLogger",
    "Candidate",
    "CapabilityRequest",
    "ConfigError",
    "ConversionRequest",
    "DEFAULT",
    "EMPTY",
    "EnvironmentalFilter",
    "FilterConfig",
    "FilterStats",
    "KANA_EXTENDED_A_14_0",
    "KANA_SUPPLEMENT_6_0",
    "KANA_SUPPLEMENT_AND_KANA_EXTENDED_A_10_0",
    "NONE",
    "NO_MODIFICATION",
    "Segment",
    "Segments",
    "SubstitutionTable",
    "TextNormalizer",
    "USER_DICTIONARY",
    "classify",
    "contains_forbidden_control",
    "filter_segments",
    "is_renderable",
    "load_config",
    "platform_default_rules",
]
