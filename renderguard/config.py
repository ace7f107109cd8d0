"""Configuration parsing and defaults for RenderGuard."""

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import List, Optional

from .audit import AuditLogger
from .character_groups import CHARACTER_GROUPS, CapabilityRequest
from .normalize import DEFAULT, NORMALIZATION_POLICIES, platform_default_rules
from .pipeline import EnvironmentalFilter


class ConfigError(ValueError):
    """Raised when configuration parsing or validation fails."""

    pass


@dataclass(frozen=True)
class FilterConfig:
    """Root configuration object for RenderGuard."""

    normalization: str = DEFAULT
    platform: Optional[str] = None
    renderable_character_groups: List[str] = field(default_factory=list)

    def capabilities(self) -> CapabilityRequest:
        return CapabilityRequest.from_groups(self.renderable_character_groups)

    def build_filter(self, audit_logger: Optional[AuditLogger] = None) -> EnvironmentalFilter:
        """Create a filter with platform rules resolved once."""

        environmental_filter = EnvironmentalFilter(
            default_rules=platform_default_rules(self.platform),
            audit_logger=audit_logger,
        )
        environmental_filter.set_normalization_policy(self.normalization)
        return environmental_filter


DEFAULT_CONFIG = FilterConfig()


def load_config(path: Path) -> FilterConfig:
    """Load configuration from a JSON-compatible YAML file path."""

    if not path.exists():
        return DEFAULT_CONFIG

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError("config must be JSON-compatible YAML") from exc
    if not isinstance(data, dict):
        raise ConfigError("config must be a JSON object")
    return config_from_dict(data)


def config_from_dict(data: dict) -> FilterConfig:
    """Parse configuration from a Python dict."""

    normalization = data.get("normalization", DEFAULT)
    if not isinstance(normalization, str):
        raise ConfigError("normalization must be a string")
    if normalization not in NORMALIZATION_POLICIES:
        raise ConfigError(f"unknown normalization policy: {normalization}")

    platform = data.get("platform")
    if platform is not None and not isinstance(platform, str):
        raise ConfigError("platform must be a string")

    groups = _as_string_list(data.get("renderable_character_groups"))
    unknown = [group for group in groups if group not in CHARACTER_GROUPS]
    if unknown:
        raise ConfigError(f"unknown character groups: {unknown}")

    return FilterConfig(
        normalization=normalization,
        platform=platform,
        renderable_character_groups=groups,
    )


def _as_string_list(value: Optional[object]) -> List[str]:
    """Ensure value is a list of strings, or default to empty."""

    if value is None:
        return []
    if not isinstance(value, list) or any(not isinstance(item, str) for item in value):
        raise ConfigError("expected a list of strings")
    return list(value)
