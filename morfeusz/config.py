"""Construction parameters for Morfeusz."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from .exceptions import ValidationError
from .types import CaseHandling, Charset, TokenNumbering, Usage, WhitespaceHandling, coerce_option

__all__ = ["MorfeuszConfig"]

_ENUM_FIELDS: dict[str, type] = {
    "usage": Usage,
    "charset": Charset,
    "case_handling": CaseHandling,
    "token_numbering": TokenNumbering,
    "whitespace_handling": WhitespaceHandling,
}


@dataclass
class MorfeuszConfig:
    """
    Parameters of a Morfeusz instance to be created.

    ``MorfeuszConfig()`` describes an engine with the default dictionary and
    the engine's own defaults for every setting. Fields left at ``None`` are
    not sent to the engine at all.

    Attributes
    ----------
        dict_name: Dictionary to load, or None for the default dictionary.
        usage: Whether the engine analyses, generates, or both.
        aggl: Agglutination rules, one of ``available_aggl_options``.
        praet: Past-tense segmentation, one of ``available_praet_options``.
        charset: Input/output encoding.
        case_handling: Treatment of case mismatches with the dictionary.
        token_numbering: When node numbering restarts.
        whitespace_handling: Whether whitespace tokens are produced.

    Enum fields accept members, ordinals or member names. They are validated
    by ``validate()``, which ``Morfeusz`` calls before anything reaches the
    native engine.

    Example:
        >>> base = MorfeuszConfig(whitespace_handling="keep_whitespaces")
        >>> gen_only = base.override(usage=Usage.GENERATE_ONLY)
    """

    dict_name: str | None = None
    usage: Usage | int | str = Usage.BOTH_ANALYSE_AND_GENERATE
    aggl: str | None = None
    praet: str | None = None
    charset: Charset | int | str | None = None
    case_handling: CaseHandling | int | str | None = None
    token_numbering: TokenNumbering | int | str | None = None
    whitespace_handling: WhitespaceHandling | int | str | None = None

    def validate(self) -> MorfeuszConfig:
        """Return a copy with every enum field coerced to its enum type.

        Raises
        ------
            ValidationError: If any field holds an out-of-range or unknown value.
        """
        if self.dict_name is not None and not isinstance(self.dict_name, str):
            raise ValidationError(
                f"dict_name must be a string, got {type(self.dict_name).__name__}",
                details={"option": "dict_name"},
            )
        for name in ("aggl", "praet"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ValidationError(
                    f"{name} must be a string, got {type(value).__name__}",
                    details={"option": name},
                )

        coerced: dict[str, Any] = {}
        for name, enum_cls in _ENUM_FIELDS.items():
            value = getattr(self, name)
            if value is not None:
                coerced[name] = coerce_option(enum_cls, value, name)
        return replace(self, **coerced)

    def override(self, **kwargs: Any) -> MorfeuszConfig:
        """Return a new config with the given fields replaced."""
        known = {f.name for f in fields(self)}
        unknown = set(kwargs) - known
        if unknown:
            raise ValidationError(
                f"Unknown config field(s): {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)},
            )
        return replace(self, **kwargs)
