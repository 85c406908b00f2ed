"""
Morfeusz engine handle.

Provides the Morfeusz class: creation, configuration, analysis, generation,
cloning and release of one native engine instance.
"""

from __future__ import annotations

from typing import Any

from ._bindings import borrow_string, get_lib, take_error, take_string, take_string_array, take_token_info_array
from ._logging import scoped_logger
from .config import MorfeuszConfig
from .exceptions import (
    AnalysisError,
    ConfigurationError,
    DictionaryError,
    GenerationError,
    MorfeuszError,
    StateError,
    ValidationError,
)
from .resolver import IdResolver, _fits_c_int
from .result import AnalysisResult
from .search_paths import DictionarySearchPaths
from .token import TokenInfo
from .types import (
    INVALID_ID,
    CaseHandling,
    Charset,
    TokenNumbering,
    Usage,
    WhitespaceHandling,
    coerce_option,
)

__all__ = ["Morfeusz", "version", "default_dict_name", "copyright"]

logger = scoped_logger("engine")

_DEFAULT_ENCODING = Charset.UTF8.codec


class Morfeusz:
    """
    Morphological analyser and generator for Polish.

    One instance owns one native engine: its settings, its dictionary search
    paths and its view of the loaded dictionary. An instance and the
    analysis results derived from it must not be used from several threads
    at once.

    Attributes
    ----------
    resolver : IdResolver
        Tag, name and label tables of the loaded dictionary.
    search_paths : DictionarySearchPaths
        Directories searched by ``set_dictionary``.
    charset, case_handling, token_numbering, whitespace_handling
        Enum settings. Assigning validates the value in Python first;
        the engine keeps the previous value when a value is rejected.
    aggl, praet : str
        Agglutination rules and past-tense segmentation.

    Example:
        >>> m = Morfeusz()
        >>> for t in m.analyse("Ala ma kota."):
        ...     print(t.start_node, t.end_node, t.orth, t.lemma, t.tag(m))
        >>> [t.orth for t in m.generate("bez", tag="subst:sg:gen:m3")]
        ['bzu']
    """

    __slots__ = ("_lib", "_ptr", "_encoding", "_usage", "_dict_name", "_cursors")

    def __init__(
        self,
        dict_name: str | None = None,
        usage: Usage | int | str | None = None,
        *,
        aggl: str | None = None,
        praet: str | None = None,
        charset: Charset | int | str | None = None,
        case_handling: CaseHandling | int | str | None = None,
        token_numbering: TokenNumbering | int | str | None = None,
        whitespace_handling: WhitespaceHandling | int | str | None = None,
        config: MorfeuszConfig | None = None,
    ):
        """
        Create an engine.

        Args:
            dict_name: Dictionary to load; None (or "") for the default one.
            usage: Analysis and/or generation. Default both.
            aggl, praet, charset, case_handling, token_numbering,
            whitespace_handling: Optional initial settings.
            config: Base configuration; explicit arguments override it.

        Raises
        ------
            ValidationError: If any option is out of range. Nothing is
                created in that case.
            DictionaryError: If the engine could not be created.
            ConfigurationError: If the engine rejected an initial setting.
            LibraryError: If the native library cannot be loaded.
        """
        self._ptr: int | None = None
        self._dict_name: str | None = None
        self._usage = Usage.BOTH_ANALYSE_AND_GENERATE
        # Open cursor pointers; all are released before the engine itself.
        self._cursors: set[int] = set()
        overrides = {
            "dict_name": dict_name,
            "usage": usage,
            "aggl": aggl,
            "praet": praet,
            "charset": charset,
            "case_handling": case_handling,
            "token_numbering": token_numbering,
            "whitespace_handling": whitespace_handling,
        }
        cfg = (config or MorfeuszConfig()).override(
            **{k: v for k, v in overrides.items() if v is not None}
        )
        cfg = cfg.validate()
        usage_value = cfg.usage if cfg.usage is not None else Usage.BOTH_ANALYSE_AND_GENERATE

        self._lib = get_lib()
        self._encoding = _DEFAULT_ENCODING
        self._usage = usage_value
        self._dict_name = cfg.dict_name or None

        name_bytes = self._dict_name.encode("utf-8") if self._dict_name else None
        logger.debug(
            "Creating engine", extra={"dict_name": self._dict_name, "usage": usage_value.name}
        )
        ptr = self._lib.morf_create(borrow_string(name_bytes), int(usage_value))
        if not ptr:
            label = self._dict_name or "default"
            raise DictionaryError(
                f"Failed to load dictionary {label!r}",
                details={"dict_name": self._dict_name, "usage": usage_value.name},
            )
        self._ptr = ptr

        try:
            self._apply_config(cfg)
        except MorfeuszError:
            self.close()
            raise
        logger.debug("Engine created", extra={"dict_name": self._dict_name})

    def _apply_config(self, cfg: MorfeuszConfig) -> None:
        if cfg.aggl is not None:
            self.aggl = cfg.aggl
        if cfg.praet is not None:
            self.praet = cfg.praet
        if cfg.charset is not None:
            self.charset = cfg.charset
        if cfg.case_handling is not None:
            self.case_handling = cfg.case_handling
        if cfg.token_numbering is not None:
            self.token_numbering = cfg.token_numbering
        if cfg.whitespace_handling is not None:
            self.whitespace_handling = cfg.whitespace_handling

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def _handle(self) -> int:
        """Get the native handle, raising if closed."""
        if self._ptr is None:
            raise StateError("Morfeusz instance is closed")
        return self._ptr

    @property
    def closed(self) -> bool:
        return self._ptr is None

    @property
    def usage(self) -> Usage:
        """Usage the engine was created with."""
        return self._usage

    def clone(self) -> Morfeusz:
        """
        Copy this engine.

        The copy has its own dictionary search path list and must be closed
        separately. The loaded dictionary and its id tables are shared
        read-only between both engines; no other independence is promised.

        Raises
        ------
            StateError: If this instance is closed.
            DictionaryError: If the engine could not be copied.
        """
        ptr = self._lib.morf_clone(self._handle)
        if not ptr:
            raise DictionaryError("Failed to clone engine", details={"dict_name": self._dict_name})
        other = Morfeusz.__new__(Morfeusz)
        other._lib = self._lib
        other._ptr = ptr
        other._encoding = _DEFAULT_ENCODING
        other._usage = self._usage
        other._dict_name = self._dict_name
        other._cursors = set()
        current = other.charset
        if current is not None:
            other._encoding = current.codec
        logger.debug("Engine cloned", extra={"dict_name": self._dict_name})
        return other

    def close(self) -> None:
        """
        Release the native engine and every open result derived from it.

        After calling close(), the instance cannot be used. Safe to call
        multiple times (idempotent).
        """
        ptr = getattr(self, "_ptr", None)
        if not ptr:
            return
        self._ptr = None
        cursors = self._cursors
        while cursors:
            self._lib.morf_result_free(cursors.pop())
        self._lib.morf_free(ptr)
        logger.debug("Engine released", extra={"dict_name": self._dict_name})

    def __enter__(self) -> Morfeusz:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __del__(self):
        try:
            self.close()
        except Exception:
            pass

    def __repr__(self) -> str:
        state = " closed" if self._ptr is None else ""
        return f"<Morfeusz dict={self._dict_name or 'default'!r} usage={self._usage.name}{state}>"

    # =========================================================================
    # Marshaling helpers
    # =========================================================================

    def _encode(self, text: Any, what: str) -> bytes:
        if isinstance(text, str):
            try:
                return text.encode(self._encoding)
            except UnicodeEncodeError as exc:
                raise ValidationError(
                    f"{what} cannot be encoded in {self._encoding}: {exc.reason}",
                    details={"encoding": self._encoding},
                ) from exc
        if isinstance(text, (bytes, bytearray, memoryview)):
            return bytes(text)
        raise ValidationError(
            f"{what} must be str or bytes, got {type(text).__name__}",
            details={"type": type(text).__name__},
        )

    def _take_string(self, s: Any) -> str:
        return take_string(self._lib, s, self._encoding)

    # =========================================================================
    # Analysis and generation
    # =========================================================================

    def analyse(self, text: str | bytes) -> AnalysisResult:
        """
        Start morphological analysis of ``text``.

        ``str`` input is encoded with the current charset; ``bytes`` are
        passed through unchanged.

        Returns
        -------
            AnalysisResult streaming the interpretations.

        Raises
        ------
            AnalysisError: If the engine cannot analyse (``GENERATE_ONLY``)
                or rejected the input.
            ValidationError: If ``text`` has the wrong type or cannot be encoded.
        """
        data = self._encode(text, "text")
        ptr = self._lib.morf_analyse(self._handle, borrow_string(data))
        if not ptr:
            raise AnalysisError(
                "Analysis could not be started",
                details={"usage": self._usage.name, "length": len(data)},
            )
        self._cursors.add(ptr)
        return AnalysisResult(self, ptr)

    def generate(
        self,
        lemma: str | bytes,
        tag_id: int | None = None,
        *,
        tag: str | None = None,
    ) -> list[TokenInfo]:
        """
        Generate inflected forms of ``lemma``.

        Args:
            lemma: Lemma, optionally with a homonym qualifier ("bez:S").
            tag_id: Restrict output to one inflectional tag id.
            tag: Restrict output to one tag given by name (alternative to tag_id).

        Returns
        -------
            Every matching form. An empty list means the lemma is valid but
            the tag restriction matched nothing.

        Raises
        ------
            GenerationError: If the engine reported an error (e.g. it was
                created with ``ANALYSE_ONLY``).
            ValidationError: If both ``tag_id`` and ``tag`` are given or the
                tag name is unknown, or if ``tag_id`` does not fit a C int.
        """
        if tag is not None:
            if tag_id is not None:
                raise ValidationError("Pass either tag_id or tag, not both")
            tag_id = self.resolver.tag_id(tag)
            if tag_id == INVALID_ID:
                raise ValidationError(f"Unknown tag: {tag!r}", details={"tag": tag})
        if tag_id is not None and (not isinstance(tag_id, int) or isinstance(tag_id, bool)):
            raise ValidationError(
                f"tag_id must be an int, got {type(tag_id).__name__}",
                details={"tag_id": tag_id},
            )
        if tag_id is not None and not _fits_c_int(tag_id):
            raise ValidationError(
                f"tag_id out of range: {tag_id}", details={"tag_id": tag_id}
            )

        data = borrow_string(self._encode(lemma, "lemma"))
        if tag_id is None:
            arr = self._lib.morf_generate(self._handle, data)
        else:
            arr = self._lib.morf_generate_with_tag(self._handle, tag_id, data)
        tokens, error = take_token_info_array(self._lib, arr, self._encoding)
        if error is not None:
            raise GenerationError(error, details={"lemma": lemma, "tag_id": tag_id})
        return tokens

    # =========================================================================
    # Id tables and search paths
    # =========================================================================

    @property
    def resolver(self) -> IdResolver:
        """Tag, name and label tables of the current dictionary."""
        return IdResolver(self)

    @property
    def search_paths(self) -> DictionarySearchPaths:
        """Directories searched for dictionaries, in order."""
        return DictionarySearchPaths(self)

    # =========================================================================
    # Dictionary
    # =========================================================================

    @property
    def dict_name(self) -> str | None:
        """Name of the dictionary requested at creation or by set_dictionary."""
        return self._dict_name

    @property
    def dict_id(self) -> str:
        """Id of the loaded dictionary."""
        return self._take_string(self._lib.morf_dict_id(self._handle))

    @property
    def dict_copyright(self) -> str:
        """Copyright text of the loaded dictionary."""
        return self._take_string(self._lib.morf_dict_copyright(self._handle))

    def set_dictionary(self, dict_name: str) -> None:
        """
        Load another dictionary, looked up in ``search_paths``.

        Ids obtained from the previous dictionary become meaningless.

        Raises
        ------
            ConfigurationError: If the dictionary cannot be loaded; the
                current dictionary stays in use.
        """
        if not isinstance(dict_name, str) or not dict_name:
            raise ValidationError(
                "dict_name must be a non-empty string", details={"dict_name": dict_name}
            )
        error = take_error(
            self._lib,
            self._lib.morf_set_dictionary(self._handle, borrow_string(dict_name.encode("utf-8"))),
            self._encoding,
        )
        if error is not None:
            raise ConfigurationError(error, details={"option": "dictionary", "value": dict_name})
        self._dict_name = dict_name
        logger.info("Dictionary switched", extra={"dict_name": dict_name})

    # =========================================================================
    # Settings
    # =========================================================================

    def _set_enum(self, func_name: str, enum_cls: type, value: Any, option: str) -> Any:
        member = coerce_option(enum_cls, value, option)
        func = getattr(self._lib, func_name)
        error = take_error(self._lib, func(self._handle, int(member)), self._encoding)
        if error is not None:
            raise ConfigurationError(error, details={"option": option, "value": member.name})
        logger.debug("Setting changed", extra={"option": option, "value": member.name})
        return member

    def _get_enum(self, func_name: str, enum_cls: type, option: str) -> Any:
        value = getattr(self._lib, func_name)(self._handle)
        try:
            return enum_cls(value)
        except ValueError:
            logger.warning(
                "Engine reported a value outside the known %s options",
                option,
                extra={"option": option, "value": value},
            )
            return None

    def _set_string(self, func_name: str, value: Any, option: str) -> None:
        if not isinstance(value, str):
            raise ValidationError(
                f"{option} must be a string, got {type(value).__name__}",
                details={"option": option},
            )
        data = self._encode(value, option)
        func = getattr(self._lib, func_name)
        error = take_error(self._lib, func(self._handle, borrow_string(data)), self._encoding)
        if error is not None:
            raise ConfigurationError(error, details={"option": option, "value": value})
        logger.debug("Setting changed", extra={"option": option, "value": value})

    @property
    def charset(self) -> Charset | None:
        """Input and output encoding (None if the engine reports an unknown one)."""
        return self._get_enum("morf_charset", Charset, "charset")

    @charset.setter
    def charset(self, value: Charset | int | str) -> None:
        member = self._set_enum("morf_set_charset", Charset, value, "charset")
        self._encoding = member.codec

    @property
    def case_handling(self) -> CaseHandling | None:
        return self._get_enum("morf_case_handling", CaseHandling, "case_handling")

    @case_handling.setter
    def case_handling(self, value: CaseHandling | int | str) -> None:
        self._set_enum("morf_set_case_handling", CaseHandling, value, "case_handling")

    @property
    def token_numbering(self) -> TokenNumbering | None:
        return self._get_enum("morf_token_numbering", TokenNumbering, "token_numbering")

    @token_numbering.setter
    def token_numbering(self, value: TokenNumbering | int | str) -> None:
        self._set_enum("morf_set_token_numbering", TokenNumbering, value, "token_numbering")

    @property
    def whitespace_handling(self) -> WhitespaceHandling | None:
        return self._get_enum("morf_whitespace_handling", WhitespaceHandling, "whitespace_handling")

    @whitespace_handling.setter
    def whitespace_handling(self, value: WhitespaceHandling | int | str) -> None:
        self._set_enum(
            "morf_set_whitespace_handling", WhitespaceHandling, value, "whitespace_handling"
        )

    @property
    def aggl(self) -> str:
        """Current agglutination rules."""
        return self._take_string(self._lib.morf_aggl(self._handle))

    @aggl.setter
    def aggl(self, value: str) -> None:
        self._set_string("morf_set_aggl", value, "aggl")

    @property
    def praet(self) -> str:
        """Current past-tense segmentation."""
        return self._take_string(self._lib.morf_praet(self._handle))

    @praet.setter
    def praet(self, value: str) -> None:
        self._set_string("morf_set_praet", value, "praet")

    @property
    def available_aggl_options(self) -> list[str]:
        """Values accepted by ``aggl``."""
        arr = self._lib.morf_available_aggl_options(self._handle)
        return take_string_array(self._lib, arr, self._encoding)

    @property
    def available_praet_options(self) -> list[str]:
        """Values accepted by ``praet``."""
        arr = self._lib.morf_available_praet_options(self._handle)
        return take_string_array(self._lib, arr, self._encoding)


# =============================================================================
# Library information
# =============================================================================


def version() -> str:
    """Version of the underlying Morfeusz 2 library."""
    lib = get_lib()
    return take_string(lib, lib.morf_version(), _DEFAULT_ENCODING)


def default_dict_name() -> str:
    """Name of the dictionary loaded when none is given."""
    lib = get_lib()
    return take_string(lib, lib.morf_default_dict_name(), _DEFAULT_ENCODING)


def copyright() -> str:
    """Copyright text of the underlying Morfeusz 2 library."""
    lib = get_lib()
    return take_string(lib, lib.morf_copyright(), _DEFAULT_ENCODING)
