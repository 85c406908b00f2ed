"""
Morfeusz exceptions.

    MorfeuszError (base)
    ├── LibraryError - Native shim library missing or not loadable
    ├── DictionaryError - Engine could not be created (dictionary, usage)
    ├── AnalysisError - Analysis cursor could not be created
    ├── ConfigurationError - Engine rejected a setting
    ├── GenerationError - Engine reported an error while generating forms
    ├── StateError - Operation on a closed engine or result
    └── ValidationError - Invalid argument rejected before the native call
"""

from .exceptions import (
    AnalysisError,
    ConfigurationError,
    DictionaryError,
    GenerationError,
    LibraryError,
    MorfeuszError,
    StateError,
    ValidationError,
)

__all__ = [
    # Base
    "MorfeuszError",
    # Native library
    "LibraryError",
    # Engine
    "DictionaryError",
    "AnalysisError",
    "ConfigurationError",
    "GenerationError",
    # State
    "StateError",
    # Validation
    "ValidationError",
]
