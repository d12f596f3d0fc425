from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from enum import Enum
from typing import Any, Union

from jsonparams.parsing.mime import JSON, MimeType, lookup_mime_type


class ParserKind(str, Enum):
    JSON = "json"


ParserStrategy = Union[ParserKind, Callable[[str], Any]]


class ParserRegistry:
    """Content-type to parser-strategy table.

    Keys are MIME types; registering a type also covers its synonyms, so the
    JSON entry answers for `application/json`, `text/x-json` and
    `application/jsonrequest` alike.
    """

    def __init__(self, parsers: Mapping[MimeType | str, ParserStrategy] | None = None) -> None:
        self._parsers: dict[MimeType, ParserStrategy] = {}
        for mime, strategy in (parsers or {}).items():
            self.register(mime, strategy)

    @staticmethod
    def _coerce(mime: MimeType | str) -> MimeType:
        return mime if isinstance(mime, MimeType) else lookup_mime_type(mime)

    def register(self, mime: MimeType | str, strategy: ParserStrategy) -> None:
        if not isinstance(strategy, ParserKind) and not callable(strategy):
            raise TypeError(f"Parser strategy must be a ParserKind or a callable, got {strategy!r}")
        self._parsers[self._coerce(mime)] = strategy

    def unregister(self, mime: MimeType | str) -> ParserStrategy | None:
        return self._parsers.pop(self._coerce(mime), None)

    def lookup(self, media_type: str) -> ParserStrategy | None:
        """Find the strategy for a bare, lower-cased media type."""

        if not media_type:
            return None
        for mime, strategy in self._parsers.items():
            if media_type in mime.all_strings:
                return strategy
        return None

    def copy(self) -> ParserRegistry:
        return ParserRegistry(dict(self._parsers))

    def clear(self) -> None:
        self._parsers.clear()

    def items(self) -> list[tuple[MimeType, ParserStrategy]]:
        return list(self._parsers.items())

    def __contains__(self, mime: object) -> bool:
        if not isinstance(mime, (MimeType, str)):
            return False
        return self._coerce(mime) in self._parsers

    def __iter__(self) -> Iterator[MimeType]:
        return iter(list(self._parsers))

    def __len__(self) -> int:
        return len(self._parsers)

    def __repr__(self) -> str:
        entries = ", ".join(f"{mime}={strategy!r}" for mime, strategy in self._parsers.items())
        return f"ParserRegistry({entries})"


def default_registry() -> ParserRegistry:
    return ParserRegistry({JSON: ParserKind.JSON})


@contextmanager
def override_parsers(
    registry: ParserRegistry, parsers: Mapping[MimeType | str, ParserStrategy]
) -> Iterator[ParserRegistry]:
    """Temporarily register `parsers`, restoring the previous entries on exit."""

    saved = registry.items()
    try:
        for mime, strategy in parsers.items():
            registry.register(mime, strategy)
        yield registry
    finally:
        registry.clear()
        for mime, strategy in saved:
            registry.register(mime, strategy)
