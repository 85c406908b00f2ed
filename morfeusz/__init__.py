"""
Morfeusz - Polish morphological analysis and generation from Python.

Wraps the Morfeusz 2 engine through a small C shim loaded with ctypes.
No dependencies beyond the standard library and the native engine.

Quick Start
-----------

Analysis:

    >>> from morfeusz import Morfeusz
    >>>
    >>> m = Morfeusz()
    >>> for t in m.analyse("Ala ma kota."):
    ...     print(t.start_node, t.end_node, t.orth, t.lemma, t.tag(m))
    0 1 Ala Ala subst:sg:nom:f
    ...

Generation:

    >>> [t.orth for t in m.generate("bez", tag="subst:sg:gen:m3")]
    ['bzu']

Settings:

    >>> from morfeusz import WhitespaceHandling
    >>> m.whitespace_handling = WhitespaceHandling.KEEP_WHITESPACES
    >>> m.aggl = "permissive"


Resources
---------

Engines and analysis results hold native memory. Both are released when
garbage collected; use ``close()`` or a ``with`` block to release them
earlier. Closing an engine closes every result it produced.

    >>> with Morfeusz(usage="analyse_only") as m:
    ...     tokens = m.analyse("kota").to_list()


Core Classes
------------

- `Morfeusz` - One engine instance: settings, analysis, generation
- `AnalysisResult` - Lazy stream of interpretations from ``analyse()``
- `TokenInfo` - One interpretation, copied out of native memory
- `IdResolver` - Tag, name and label tables (``Morfeusz.resolver``)
- `DictionarySearchPaths` - Dictionary directories (``Morfeusz.search_paths``)
- `MorfeuszConfig` - Reusable construction parameters
"""

# Version from _version.py (synced from VERSION file at build time)
from morfeusz._logging import setup_logging
from morfeusz._version import __version__ as __version__
from morfeusz.config import MorfeuszConfig
from morfeusz.engine import Morfeusz, copyright, default_dict_name, version

# Exceptions (all via morfeusz.exceptions)
from morfeusz.exceptions import (
    AnalysisError,
    ConfigurationError,
    DictionaryError,
    GenerationError,
    LibraryError,
    MorfeuszError,
    StateError,
    ValidationError,
)
from morfeusz.resolver import IdResolver
from morfeusz.result import AnalysisResult
from morfeusz.search_paths import DictionarySearchPaths
from morfeusz.token import TokenInfo
from morfeusz.types import (
    IGN_TAG_ID,
    INVALID_ID,
    WHITESPACE_TAG_ID,
    CaseHandling,
    Charset,
    TokenNumbering,
    Usage,
    WhitespaceHandling,
)


def set_log_level(level: str) -> None:
    """Set logging verbosity level.

    Args:
        level: One of 'trace', 'debug', 'info', 'warn', 'error', 'off'.
               Default is 'warn' (silent operation).

    Example:
        >>> import morfeusz
        >>> morfeusz.set_log_level('debug')  # Enable debug output
        >>> morfeusz.set_log_level('warn')   # Back to silent (default)
    """
    setup_logging(level)


# =============================================================================
# Public API
# =============================================================================
#
# Comments group the exports into sections. Other symbols remain importable
# via submodules (e.g., from morfeusz.types import coerce_option).
#
__all__ = [
    # Engine
    "Morfeusz",
    "MorfeuszConfig",
    "AnalysisResult",
    "TokenInfo",
    "IdResolver",
    "DictionarySearchPaths",
    # Options
    "Usage",
    "Charset",
    "CaseHandling",
    "TokenNumbering",
    "WhitespaceHandling",
    "IGN_TAG_ID",
    "WHITESPACE_TAG_ID",
    "INVALID_ID",
    # Library info
    "version",
    "default_dict_name",
    "copyright",
    # Logging
    "setup_logging",
    "set_log_level",
    # Exceptions
    "MorfeuszError",
    "LibraryError",
    "DictionaryError",
    "AnalysisError",
    "ConfigurationError",
    "GenerationError",
    "StateError",
    "ValidationError",
]
