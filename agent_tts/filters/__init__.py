"""Message filters and their composition into a chain.

This package provides the filter protocol, the built-in speech filters, and
the chain that applies them in order.
"""

from .base import MessageFilter, ToggleableFilter
from .chain import FilterChain
from .custom import CallableFilter
from .emoji import EmojiFilter
from .factory import (
    DEFAULT_FILTER_ORDER,
    build_filter_chain,
    build_filters,
    canonical_filter_name,
    create_filter,
    reload_filter_chain,
)
from .filepath import FilepathFilter
from .length import LengthFilter
from .markdown import MarkdownFilter
from .pronunciation import (
    DEFAULT_PRONUNCIATIONS,
    PronunciationFilter,
    PronunciationRules,
    merge_pronunciation_tables,
)
from .role import RoleFilter
from .url import UrlFilter

__all__ = [
    "MessageFilter",
    "ToggleableFilter",
    "FilterChain",
    "CallableFilter",
    "EmojiFilter",
    "FilepathFilter",
    "LengthFilter",
    "MarkdownFilter",
    "PronunciationFilter",
    "PronunciationRules",
    "RoleFilter",
    "UrlFilter",
    "DEFAULT_FILTER_ORDER",
    "DEFAULT_PRONUNCIATIONS",
    "build_filter_chain",
    "build_filters",
    "canonical_filter_name",
    "create_filter",
    "merge_pronunciation_tables",
    "reload_filter_chain",
]
