"""Unit tests for building chains from configuration."""

from __future__ import annotations

import pytest

from agent_tts.config import ChainConfig, FilterSettings
from agent_tts.errors import FilterConfigurationError
from agent_tts.filters.factory import (
    DEFAULT_FILTER_ORDER,
    build_filter_chain,
    build_filters,
    canonical_filter_name,
    reload_filter_chain,
)
from agent_tts.filters.length import LengthFilter
from agent_tts.filters.pronunciation import PronunciationFilter
from agent_tts.filters.role import RoleFilter
from agent_tts.models.datatypes import Forwarded, ParsedMessage, Role, Suppressed


def test_default_chain_uses_default_order() -> None:
    """Without configuration the default filter order should be used."""

    chain = build_filter_chain()

    assert [item.name for item in chain.filters] == list(DEFAULT_FILTER_ORDER)
    assert all(item.enabled for item in chain.filters)


def test_default_chain_end_to_end() -> None:
    """The default chain should produce speakable assistant text."""

    chain = build_filter_chain()
    message = ParsedMessage(
        role=Role.ASSISTANT,
        content=(
            "**Done!** \N{PARTY POPPER} Pushed to https://github.com/acme/app and "
            "updated ~/projects/demo/app.py with npm."
        ),
    )

    result = chain.process(message)

    assert isinstance(result, Forwarded)
    assert result.message.content == "Done! Pushed to U R L and updated app dot pie with N P M."


def test_default_chain_suppresses_user_messages() -> None:
    """The default role gate only forwards assistant messages."""

    result = build_filter_chain().process(ParsedMessage(role=Role.USER, content="hi"))

    assert isinstance(result, Suppressed)
    assert result.filter_name == "role"


def test_settings_apply_by_alias_onto_default_chain() -> None:
    """Aliases should resolve to default filters and apply enabled flags and options."""

    config = ChainConfig(
        filters=(
            FilterSettings(name="emoji", enabled=False),
            FilterSettings(name="pronunciation", options={"git": "get"}),
            FilterSettings(name="role", options={"allowed_roles": ["assistant", "user"]}),
        )
    )

    filters = build_filters(config)

    assert [item.name for item in filters] == list(DEFAULT_FILTER_ORDER)
    by_name = {item.name: item for item in filters}
    assert by_name["emoji-filter"].enabled is False
    pronunciation = by_name["pronunciation"]
    assert isinstance(pronunciation, PronunciationFilter)
    assert pronunciation.table["git"] == "get"
    role_filter = by_name["role"]
    assert isinstance(role_filter, RoleFilter)
    assert role_filter.allowed_roles == frozenset({Role.ASSISTANT, Role.USER})


def test_non_default_filters_are_appended_in_config_order() -> None:
    """Built-ins outside the default chain should run after the defaults."""

    config = ChainConfig(filters=(FilterSettings(name="length", options={"max_length": 40}),))

    filters = build_filters(config)

    assert [item.name for item in filters] == [*DEFAULT_FILTER_ORDER, "length"]
    assert isinstance(filters[-1], LengthFilter)
    assert filters[-1].max_length == 40


def test_explicit_chain_preserves_configured_order() -> None:
    """With defaults off the chain is exactly the configured list."""

    config = ChainConfig(
        filters=(
            FilterSettings(name="pronunciation"),
            FilterSettings(name="url-filter"),
            FilterSettings(name="emoji"),
        ),
        use_defaults=False,
    )

    assert [item.name for item in build_filters(config)] == [
        "pronunciation",
        "url-filter",
        "emoji-filter",
    ]


@pytest.mark.parametrize(
    ("settings", "message"),
    [
        (FilterSettings(name="sparkle"), "Unknown filter `sparkle`"),
        (FilterSettings(name="url", options={"mode": "strict"}), "does not accept option(s): mode"),
        (FilterSettings(name="role", options={"allowed_roles": 3}), "must be a list"),
        (FilterSettings(name="role", options={"allowed_roles": ["bot"]}), "Unknown role `bot`"),
        (FilterSettings(name="length", options={"max_length": 0}), "positive integer"),
        (FilterSettings(name="pronunciation", options={"git": 1}), "must be a string"),
    ],
)
def test_invalid_settings_raise_configuration_errors(
    settings: FilterSettings, message: str
) -> None:
    """Configuration errors should surface at build time."""

    with pytest.raises(FilterConfigurationError) as exc_info:
        build_filters(ChainConfig(filters=(settings,)))

    assert message in exc_info.value.detail


def test_duplicate_default_settings_are_rejected() -> None:
    """Configuring the same default filter twice is ambiguous."""

    config = ChainConfig(filters=(FilterSettings(name="emoji"), FilterSettings(name="emoji-filter")))

    with pytest.raises(FilterConfigurationError, match="configured more than once"):
        build_filters(config)


def test_canonical_filter_name_accepts_aliases_and_stable_names() -> None:
    """Short aliases and stable names resolve to the same filter."""

    assert canonical_filter_name(" Emoji ") == "emoji-filter"
    assert canonical_filter_name("emoji-filter") == "emoji-filter"
    assert canonical_filter_name("markdown") == "markdown-filter"


def test_reload_swaps_filters_on_valid_config() -> None:
    """A valid reload should replace the chain's filters."""

    chain = build_filter_chain()
    reload_filter_chain(
        chain, ChainConfig(filters=(FilterSettings(name="url"),), use_defaults=False)
    )

    assert [item.name for item in chain.filters] == ["url-filter"]


def test_reload_keeps_previous_filters_on_invalid_config() -> None:
    """An invalid reload should fail fast and keep the previous filters."""

    chain = build_filter_chain()
    previous = chain.filters

    with pytest.raises(FilterConfigurationError):
        reload_filter_chain(
            chain,
            ChainConfig(filters=(FilterSettings(name="pronunciation", options={"": "x"}),)),
        )

    assert chain.filters is previous


def test_default_chain_list_item_ending_in_emoji_reads_cleanly() -> None:
    """List periods added before emoji removal should not leave a stray space."""

    message = ParsedMessage(
        role=Role.ASSISTANT,
        content="Steps:\n- run npm install \N{PARTY POPPER}\n- open the app",
    )

    result = build_filter_chain().process(message)

    assert isinstance(result, Forwarded)
    assert result.message.content == "Steps. run N P M install. open the app."
