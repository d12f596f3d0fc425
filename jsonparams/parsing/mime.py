from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final


@dataclass(frozen=True)
class MimeType:
    """A media type plus the alternate names clients send for it."""

    string: str
    synonyms: tuple[str, ...] = field(default=())

    @property
    def all_strings(self) -> tuple[str, ...]:
        return (self.string, *self.synonyms)

    def __post_init__(self) -> None:
        # Header media types are compared lower-cased.
        object.__setattr__(self, "string", self.string.strip().lower())
        object.__setattr__(self, "synonyms", tuple(name.strip().lower() for name in self.synonyms))

    def __str__(self) -> str:
        return self.string


JSON: Final[MimeType] = MimeType("application/json", synonyms=("text/x-json", "application/jsonrequest"))
FORM_URLENCODED: Final[MimeType] = MimeType("application/x-www-form-urlencoded")
MULTIPART_FORM: Final[MimeType] = MimeType("multipart/form-data")

_LOOKUP: dict[str, MimeType] = {}
for _mime in (JSON, FORM_URLENCODED, MULTIPART_FORM):
    for _name in _mime.all_strings:
        _LOOKUP[_name] = _mime


def lookup_mime_type(name: str) -> MimeType:
    """Resolve a media type string, creating a synonym-less type for unknown names."""

    key = name.strip().lower()
    return _LOOKUP.get(key) or MimeType(key)


def split_content_type(header: str | None) -> tuple[str, dict[str, str]]:
    """Split a Content-Type header into a lower-cased media type and its parameters.

    >>> split_content_type("application/json; charset=UTF-8")
    ('application/json', {'charset': 'UTF-8'})
    """

    if not header:
        return "", {}

    media_type, _, rest = header.partition(";")
    params: dict[str, str] = {}
    for item in rest.split(";"):
        key, sep, value = item.partition("=")
        if not sep:
            continue
        params[key.strip().lower()] = value.strip().strip('"')
    return media_type.strip().lower(), params
