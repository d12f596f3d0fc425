from __future__ import annotations

import json
from collections.abc import Callable
from functools import partial
from typing import Any

from jsonparams.parsing.errors import ParamsParseError
from jsonparams.parsing.mime import split_content_type
from jsonparams.parsing.normalize import Params, to_params
from jsonparams.parsing.registry import ParserKind, ParserRegistry, ParserStrategy, default_registry

_DEFAULT_CHARSET = "utf-8"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


_DECODERS: dict[ParserKind, Callable[[str], Any]] = {
    ParserKind.JSON: partial(json.loads, parse_constant=_reject_constant),
}


class ParamsParser:
    """Decodes request bodies whose content type has a registered parser."""

    def __init__(self, registry: ParserRegistry | None = None) -> None:
        self.registry = registry if registry is not None else default_registry()

    def parses(self, content_type: str | None) -> bool:
        media_type, _ = split_content_type(content_type)
        return self.registry.lookup(media_type) is not None

    def parse(self, body: bytes | str, content_type: str | None) -> Params | None:
        """Return the body's parameters, or None when the type is not registered.

        Raises ParamsParseError when the body cannot be decoded.
        """

        media_type, options = split_content_type(content_type)
        strategy = self.registry.lookup(media_type)
        if strategy is None:
            return None
        if not body:
            return {}

        text = body if isinstance(body, str) else None
        try:
            if text is None:
                text = body.decode(options.get("charset") or _DEFAULT_CHARSET)
            data = _run_strategy(strategy, text)
        except Exception as exc:
            raw = text if text is not None else body.decode(_DEFAULT_CHARSET, errors="replace")
            raise ParamsParseError(content_type or media_type, raw, exc) from exc

        return to_params(data)


def _run_strategy(strategy: ParserStrategy, text: str) -> Any:
    if isinstance(strategy, ParserKind):
        return _DECODERS[strategy](text)
    return strategy(text)
