"""Top-level package for agent-tts filters.

This package turns chat messages produced by AI coding assistants into text a
speech engine can read aloud. The main entry point is `FilterChain`, usually
built through `build_filter_chain`.
"""

from loguru import logger as _loguru_logger

from .filters import FilterChain, build_filter_chain
from .models import Forwarded, ParsedMessage, Role, Suppressed

__all__ = [
    "FilterChain",
    "Forwarded",
    "ParsedMessage",
    "Role",
    "Suppressed",
    "build_filter_chain",
    "__version__",
]

__version__ = "0.1.0"

_loguru_logger.disable(__name__)
