"""Configuration model and loaders for filter chains.

Responsibilities:
- Define chain configuration as typed, immutable dataclasses.
- Provide loader entry points for YAML files and in-memory mappings.

Key types:
- `FilterSettings`: enabled flag and options for one named filter.
- `ChainConfig`: ordered filter settings plus the default-chain switch.
- `ConfigLoader`: static construction helpers for `ChainConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

from .parsing import normalize_optional_string, parse_permissive_boolean


@dataclass(frozen=True, slots=True)
class FilterSettings:
    """Settings for one filter in a chain configuration.

    Attributes:
        name: Filter name or alias (`role`, `emoji`, `url-filter`, ...).
        enabled: Whether the filter starts enabled.
        options: Filter-specific options, validated when the filter is built.
    """

    name: str
    enabled: bool = True
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True, slots=True)
class ChainConfig:
    """Filter chain configuration.

    Attributes:
        filters: Ordered filter settings.
        use_defaults: Start from the built-in default chain and apply `filters`
            by name; when false the chain is exactly `filters`, in order.
    """

    filters: tuple[FilterSettings, ...] = ()
    use_defaults: bool = True


class ConfigLoader:
    """Factory methods for creating `ChainConfig` from external sources."""

    _SUPPORTED_KEYS = frozenset({"use_defaults", "filters"})
    _SUPPORTED_FILTER_KEYS = frozenset({"name", "enabled", "options"})

    @staticmethod
    def from_yaml(path: Path) -> ChainConfig:
        """Create a config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = yaml.safe_load(path_text)
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return ConfigLoader.from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_mapping(payload: Mapping[str, Any], source_label: str = "config") -> ChainConfig:
        """Create a config from an already-decoded mapping."""

        unknown = sorted(str(key) for key in set(payload).difference(ConfigLoader._SUPPORTED_KEYS))
        if unknown:
            raise ValueError(f"{source_label} includes unsupported key(s): {', '.join(unknown)}.")

        use_defaults = ConfigLoader._optional_boolean(
            payload, "use_defaults", source_label, default=True
        )

        raw_filters = payload.get("filters")
        if raw_filters is None:
            raw_filters = []
        if not isinstance(raw_filters, list):
            raise ValueError(f"{source_label} field `filters` must be a list.")

        filters = tuple(
            ConfigLoader._filter_settings(entry, f"{source_label} filters[{index}]")
            for index, entry in enumerate(raw_filters)
        )
        return ChainConfig(filters=filters, use_defaults=use_defaults)

    @staticmethod
    def _filter_settings(entry: object, source_label: str) -> FilterSettings:
        """Validate one `filters` list entry."""

        if isinstance(entry, str):
            entry = {"name": entry}
        if not isinstance(entry, Mapping):
            raise ValueError(f"{source_label} must be a filter name or mapping/object.")

        unknown = sorted(
            str(key) for key in set(entry).difference(ConfigLoader._SUPPORTED_FILTER_KEYS)
        )
        if unknown:
            raise ValueError(f"{source_label} includes unsupported key(s): {', '.join(unknown)}.")

        name = normalize_optional_string(entry.get("name"))
        if name is None:
            raise ValueError(f"{source_label} requires non-empty `name`.")

        enabled = ConfigLoader._optional_boolean(entry, "enabled", source_label, default=True)

        options = entry.get("options")
        if options is None:
            options = {}
        if not isinstance(options, Mapping):
            raise ValueError(f"{source_label} field `options` must be a mapping/object.")

        return FilterSettings(name=name, enabled=enabled, options=MappingProxyType(dict(options)))

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, source_label: str, default: bool
    ) -> bool:
        """Read and validate a boolean field from a payload."""

        if key not in payload:
            return default

        parsed = parse_permissive_boolean(payload[key])
        if parsed is None:
            raise ValueError(
                f"{source_label} field `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed
