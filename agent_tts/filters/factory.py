"""Filter chain construction from configuration.

Responsibilities:
- Resolve configured filter names and aliases to built-in filters.
- Build the default chain and apply per-filter settings onto it.
- Rebuild a live chain from new configuration without disturbing it on error.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from ..config import ChainConfig, FilterSettings
from ..errors import FilterConfigurationError
from ..parsing import parse_positive_int
from ..telemetry.logger import FilterLogger
from .base import MessageFilter
from .chain import FilterChain
from .emoji import EMOJI_FILTER_NAME, EmojiFilter
from .filepath import FILEPATH_FILTER_NAME, FilepathFilter
from .length import (
    DEFAULT_MAX_LENGTH,
    DEFAULT_TRUNCATE_INDICATOR,
    LENGTH_FILTER_NAME,
    LengthFilter,
)
from .markdown import MARKDOWN_FILTER_NAME, MarkdownFilter
from .pronunciation import PRONUNCIATION_FILTER_NAME, PronunciationFilter
from .role import ROLE_FILTER_NAME, RoleFilter
from .url import URL_FILTER_NAME, UrlFilter

DEFAULT_FILTER_ORDER = (
    ROLE_FILTER_NAME,
    MARKDOWN_FILTER_NAME,
    URL_FILTER_NAME,
    EMOJI_FILTER_NAME,
    FILEPATH_FILTER_NAME,
    PRONUNCIATION_FILTER_NAME,
)

_FILTER_ALIASES = {
    "role": ROLE_FILTER_NAME,
    "markdown": MARKDOWN_FILTER_NAME,
    "url": URL_FILTER_NAME,
    "emoji": EMOJI_FILTER_NAME,
    "filepath": FILEPATH_FILTER_NAME,
    "pronunciation": PRONUNCIATION_FILTER_NAME,
    "length": LENGTH_FILTER_NAME,
}


def canonical_filter_name(name: str) -> str:
    """Return the stable filter name for a configured name or alias."""

    key = name.strip().lower()
    if key in _FILTER_ALIASES:
        return _FILTER_ALIASES[key]
    if key in _FILTER_ALIASES.values():
        return key

    supported = ", ".join(sorted(_FILTER_ALIASES))
    raise FilterConfigurationError(
        filter_name=name,
        detail=f"Unknown filter `{name}`.",
        hint=f"Supported filters: {supported}.",
    )


def _reject_unknown_options(
    name: str, options: Mapping[str, Any], allowed: frozenset[str] = frozenset()
) -> None:
    """Raise when `options` holds keys outside `allowed`."""

    unknown = sorted(str(key) for key in set(options).difference(allowed))
    if unknown:
        raise FilterConfigurationError(
            filter_name=name,
            detail=f"Filter `{name}` does not accept option(s): {', '.join(unknown)}.",
        )


def _build_role(settings: FilterSettings) -> MessageFilter:
    """Build the role filter from `allowed_roles`."""

    _reject_unknown_options(ROLE_FILTER_NAME, settings.options, frozenset({"allowed_roles"}))
    roles = settings.options.get("allowed_roles", ("assistant",))
    if not isinstance(roles, (list, tuple, str)):
        raise FilterConfigurationError(
            filter_name=ROLE_FILTER_NAME,
            detail="`allowed_roles` must be a list of role names.",
        )
    return RoleFilter(allowed_roles=roles, enabled=settings.enabled)


def _build_pronunciation(settings: FilterSettings) -> MessageFilter:
    """Build the pronunciation filter; options are table overrides."""

    return PronunciationFilter(overrides=settings.options, enabled=settings.enabled)


def _build_length(settings: FilterSettings) -> MessageFilter:
    """Build the length filter from `max_length` and `truncate_indicator`."""

    options = settings.options
    _reject_unknown_options(
        LENGTH_FILTER_NAME, options, frozenset({"max_length", "truncate_indicator"})
    )
    max_length = parse_positive_int(options.get("max_length", DEFAULT_MAX_LENGTH))
    if max_length is None:
        raise FilterConfigurationError(
            filter_name=LENGTH_FILTER_NAME,
            detail="`max_length` must be a positive integer.",
        )
    return LengthFilter(
        max_length=max_length,
        truncate_indicator=options.get("truncate_indicator", DEFAULT_TRUNCATE_INDICATOR),
        enabled=settings.enabled,
    )


def _optionless(
    factory: Callable[..., MessageFilter], name: str
) -> Callable[[FilterSettings], MessageFilter]:
    """Return a builder for a filter that takes no options."""

    def build(settings: FilterSettings) -> MessageFilter:
        """Build the filter after rejecting any options."""

        _reject_unknown_options(name, settings.options)
        return factory(enabled=settings.enabled)

    return build


_BUILDERS: dict[str, Callable[[FilterSettings], MessageFilter]] = {
    ROLE_FILTER_NAME: _build_role,
    MARKDOWN_FILTER_NAME: _optionless(MarkdownFilter, MARKDOWN_FILTER_NAME),
    URL_FILTER_NAME: _optionless(UrlFilter, URL_FILTER_NAME),
    EMOJI_FILTER_NAME: _optionless(EmojiFilter, EMOJI_FILTER_NAME),
    FILEPATH_FILTER_NAME: _optionless(FilepathFilter, FILEPATH_FILTER_NAME),
    PRONUNCIATION_FILTER_NAME: _build_pronunciation,
    LENGTH_FILTER_NAME: _build_length,
}


def create_filter(settings: FilterSettings) -> MessageFilter:
    """Build one built-in filter from its settings."""

    name = canonical_filter_name(settings.name)
    return _BUILDERS[name](settings)


def build_filters(config: ChainConfig | None = None) -> tuple[MessageFilter, ...]:
    """Build the ordered filter tuple described by `config`.

    Raises:
        FilterConfigurationError: If any filter name or option is invalid.
    """

    config = config or ChainConfig()
    if not config.use_defaults:
        return tuple(create_filter(settings) for settings in config.filters)

    by_name: dict[str, FilterSettings] = {}
    extras: list[FilterSettings] = []
    for settings in config.filters:
        name = canonical_filter_name(settings.name)
        if name in by_name:
            raise FilterConfigurationError(
                filter_name=name,
                detail=f"Filter `{name}` is configured more than once.",
                hint="Set `use_defaults: false` to build a chain with repeated filters.",
            )
        by_name[name] = settings
        if name not in DEFAULT_FILTER_ORDER:
            extras.append(settings)

    filters = [
        create_filter(by_name.get(name, FilterSettings(name=name)))
        for name in DEFAULT_FILTER_ORDER
    ]
    filters.extend(create_filter(settings) for settings in extras)
    return tuple(filters)


def build_filter_chain(
    config: ChainConfig | None = None,
    logger: FilterLogger | None = None,
) -> FilterChain:
    """Build a `FilterChain` from configuration, using the default chain when omitted."""

    logger = logger or FilterLogger()
    try:
        filters = build_filters(config)
    except FilterConfigurationError as exc:
        logger.log_rejected(exc.filter_name, type(exc).__name__)
        raise

    for message_filter in filters:
        logger.log_configured(message_filter.name, enabled=message_filter.enabled)
    return FilterChain(filters, logger=logger)


def reload_filter_chain(
    chain: FilterChain,
    config: ChainConfig,
    logger: FilterLogger | None = None,
) -> None:
    """Rebuild `chain` from `config`, keeping its current filters if `config` is invalid."""

    logger = logger or FilterLogger()
    try:
        filters = build_filters(config)
    except FilterConfigurationError as exc:
        logger.log_rejected(exc.filter_name, type(exc).__name__)
        raise
    chain.replace_filters(filters)
    logger.log_configured("chain", filters=len(filters))
