"""
Morfeusz exceptions.

This module defines the exception hierarchy for morfeusz:

    MorfeuszError (base)
    ├── LibraryError - Native shim library missing or not loadable
    ├── DictionaryError - Engine could not be created (dictionary, usage)
    ├── AnalysisError - Analysis cursor could not be created
    ├── ConfigurationError - Engine rejected a setting
    ├── GenerationError - Engine reported an error while generating forms
    ├── StateError - Operation on a closed engine or result
    └── ValidationError - Invalid argument rejected before the native call

Lookups of unknown ids or strings are not errors: they return ``""`` or
``-1`` (see ``IdResolver``).

Usage:
    try:
        m = morfeusz.Morfeusz(charset=7)
    except morfeusz.ValidationError as e:
        print(f"Bad option: {e}")
    except morfeusz.MorfeuszError as e:
        print(f"Error {e.code}: {e}")
        print(f"Details: {e.details}")
"""

from typing import Any

__all__ = [
    "MorfeuszError",
    "LibraryError",
    "DictionaryError",
    "AnalysisError",
    "ConfigurationError",
    "GenerationError",
    "StateError",
    "ValidationError",
]


class MorfeuszError(Exception):
    """
    Base exception for all morfeusz errors.

    Attributes
    ----------
    message : str
        Human-readable error description.
    code : str
        Stable, string-based error code (e.g., "DICTIONARY_NOT_LOADED").
        Use this for programmatic error handling.
    details : dict[str, Any]
        Structured context (e.g., {"option": "charset", "value": 7}).

    Example
    -------
    >>> try:
    ...     morfeusz.Morfeusz("nonexistent")
    ... except morfeusz.MorfeuszError as e:
    ...     print(e.code, e.details)
    DICTIONARY_NOT_LOADED {'dict_name': 'nonexistent', 'usage': 'BOTH_ANALYSE_AND_GENERATE'}
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, code={self.code!r})"


class LibraryError(MorfeuszError, OSError):
    """
    The native shim library could not be found or loaded.

    Set ``MORFEUSZ_LIBRARY`` to the path of ``libmorfeusz_shim`` or
    reinstall the package on a machine with Morfeusz 2 development files.
    """

    def __init__(
        self,
        message: str,
        code: str = "LIBRARY_NOT_FOUND",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


class DictionaryError(MorfeuszError, RuntimeError):
    """
    The engine could not be created.

    The native factory returns no handle and no further detail, so the
    dictionary name and usage are attached in ``details``.
    """

    def __init__(
        self,
        message: str,
        code: str = "DICTIONARY_NOT_LOADED",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


class AnalysisError(MorfeuszError, RuntimeError):
    """
    Analysis could not start.

    Raised when the engine was created with ``Usage.GENERATE_ONLY`` or the
    input text was rejected.
    """

    def __init__(
        self,
        message: str,
        code: str = "ANALYSIS_FAILED",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


class ConfigurationError(MorfeuszError, ValueError):
    """
    The engine rejected a setting.

    The previous value of the setting is kept. The message is the one
    formatted by the native engine.
    """

    def __init__(
        self,
        message: str,
        code: str = "CONFIGURATION_REJECTED",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


class GenerationError(MorfeuszError, RuntimeError):
    """
    Generation of inflected forms failed.

    Common causes:
    - The engine was created with ``Usage.ANALYSE_ONLY``
    - The lemma was malformed
    """

    def __init__(
        self,
        message: str,
        code: str = "GENERATION_FAILED",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


class StateError(MorfeuszError, RuntimeError):
    """
    Invalid object state error.

    Raised when an engine or analysis result is used after ``close()``.
    """

    def __init__(
        self,
        message: str,
        code: str = "STATE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


class ValidationError(MorfeuszError, ValueError):
    """
    Invalid parameter value.

    Raised before anything is passed to the native engine, e.g. for an
    out-of-range charset or usage ordinal.
    """

    def __init__(
        self,
        message: str,
        code: str = "INVALID_ARGUMENT",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)
