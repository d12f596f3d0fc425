"""Request-body parameter parsing.

Content types are resolved through a `ParserRegistry`; matching bodies are
decoded by `ParamsParser` into plain dicts with nulls stripped from arrays.
"""

from jsonparams.parsing.errors import ParamsParseError
from jsonparams.parsing.mime import JSON, MimeType, lookup_mime_type, split_content_type
from jsonparams.parsing.normalize import WRAP_KEY, JsonValue, Params, deep_munge, to_params
from jsonparams.parsing.parser import ParamsParser
from jsonparams.parsing.registry import (
    ParserKind,
    ParserRegistry,
    ParserStrategy,
    default_registry,
    override_parsers,
)

__all__ = [
    "JSON",
    "WRAP_KEY",
    "JsonValue",
    "MimeType",
    "Params",
    "ParamsParseError",
    "ParamsParser",
    "ParserKind",
    "ParserRegistry",
    "ParserStrategy",
    "deep_munge",
    "default_registry",
    "lookup_mime_type",
    "override_parsers",
    "split_content_type",
    "to_params",
]
