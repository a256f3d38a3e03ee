from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    Iterator,
    List,
    Mapping,
    MutableMapping,
    Optional,
    Union,
)

from cachescope._exceptions import ParseError

__all__ = (
    "CacheControl",
    "Headers",
    "Vary",
    "parse_cache_control",
)


class Headers(MutableMapping[str, str]):
    """
    Case-insensitive, multi-value aware view over response headers.

    Insertion order is preserved. Reading a header that was set more than once
    returns its values joined with ``", "``.
    """

    def __init__(self, headers: Mapping[str, Union[str, List[str]]]) -> None:
        self._headers = {k.lower(): ([v] if isinstance(v, str) else v[:]) for k, v in headers.items()}

    def get_list(self, key: str) -> Optional[List[str]]:
        return self._headers.get(key.lower(), None)

    def __getitem__(self, key: str) -> str:
        return ", ".join(self._headers[key.lower()])

    def __setitem__(self, key: str, value: str) -> None:
        self._headers.setdefault(key.lower(), []).append(value)

    def __delitem__(self, key: str) -> None:
        del self._headers[key.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return repr(self._headers)

    def __str__(self) -> str:
        return str(self._headers)

    def __eq__(self, other_headers: Any) -> bool:
        return isinstance(other_headers, Headers) and self._headers == other_headers._headers  # type: ignore


RawHeaders = Union[Headers, Mapping[str, str]]


def ensure_headers(headers: RawHeaders) -> Headers:
    """Wrap a plain mapping in Headers so lookups are case-insensitive."""
    if isinstance(headers, Headers):
        return headers
    return Headers(dict(headers.items()))


class Vary:
    def __init__(self, values: List[str]) -> None:
        self.values = values

    @classmethod
    def from_value(cls, vary_value: str) -> "Vary":
        values = []

        for field_name in vary_value.split(","):
            field_name = field_name.strip()
            if field_name:
                values.append(field_name)
        return Vary(values)


@dataclass(frozen=True)
class CacheControl:
    """
    Directives of a single Cache-Control family header value.

    The same grammar is shared by ``Cache-Control``, ``CDN-Cache-Control``
    [RFC9213] and ``Netlify-CDN-Cache-Control``, so one class serves all three.

    Supported Directives:
    - immutable [RFC8246]
    - max-age [RFC9111, Section 5.2.1.1, 5.2.2.1]
    - max-stale [RFC9111, Section 5.2.1.2]
    - min-fresh [RFC9111, Section 5.2.1.3]
    - must-revalidate [RFC9111, Section 5.2.2.2]
    - no-cache [RFC9111, Section 5.2.1.4, 5.2.2.4]
    - no-store [RFC9111, Section 5.2.1.5, 5.2.2.5]
    - no-transform [RFC9111, Section 5.2.1.6, 5.2.2.6]
    - only-if-cached [RFC9111, Section 5.2.1.7]
    - private [RFC9111, Section 5.2.2.7]
    - proxy-revalidate [RFC9111, Section 5.2.2.8]
    - public [RFC9111, Section 5.2.2.9]
    - s-maxage [RFC9111, Section 5.2.2.10]
    - stale-if-error [RFC5861, Section 4]
    - stale-while-revalidate [RFC5861, Section 3]

    Boolean directives are True when present and None when absent, never False.
    Duration directives are a non-negative number of seconds, or None.
    Anything else is kept in ``extensions``, keyed by the lowercased name. Quoted
    values are stored without their surrounding quotes.
    """

    max_age: Optional[int] = None
    shared_max_age: Optional[int] = None
    max_stale: Optional[bool] = None
    max_stale_duration: Optional[int] = None
    min_fresh: Optional[int] = None
    immutable: Optional[bool] = None
    must_revalidate: Optional[bool] = None
    no_cache: Optional[bool] = None
    no_store: Optional[bool] = None
    no_transform: Optional[bool] = None
    only_if_cached: Optional[bool] = None
    private: Optional[bool] = None
    proxy_revalidate: Optional[bool] = None
    public: Optional[bool] = None
    stale_while_revalidate: Optional[int] = None
    stale_if_error: Optional[int] = None
    extensions: Dict[str, Optional[str]] = field(default_factory=dict)


DIRECTIVE_REGEXP = re.compile(r"""([a-zA-Z][a-zA-Z_-]*)\s*(?:=(?:"([^"]*)"|([^ \t",;]*)))?""")
INTEGER_PREFIX_REGEXP = re.compile(r"\s*([+-]?\d+)")

DURATION_DIRECTIVES = {
    "max-age": "max_age",
    "s-maxage": "shared_max_age",
    "min-fresh": "min_fresh",
    "stale-while-revalidate": "stale_while_revalidate",
    "stale-if-error": "stale_if_error",
}

BOOLEAN_DIRECTIVES = {
    "immutable": "immutable",
    "must-revalidate": "must_revalidate",
    "no-cache": "no_cache",
    "no-store": "no_store",
    "no-transform": "no_transform",
    "only-if-cached": "only_if_cached",
    "private": "private",
    "proxy-revalidate": "proxy_revalidate",
    "public": "public",
}


def parse_int_value(value: Optional[str]) -> Optional[int]:
    """
    Parse the leading base-10 integer of a value, return None if invalid or negative.

    Examples:
        >>> parse_int_value("3600")
        3600
        >>> parse_int_value("60s")
        60
        >>> parse_int_value("-1") is None
        True
        >>> parse_int_value("soon") is None
        True
    """
    if not value:
        return None
    match = INTEGER_PREFIX_REGEXP.match(value)
    if match is None:
        return None
    val = int(match.group(1))
    return val if val >= 0 else None


def tokenize(value: str) -> Dict[str, Optional[str]]:
    """Split a header value into lowercased directive names and their raw values."""
    directives: Dict[str, Optional[str]] = {}

    for match in DIRECTIVE_REGEXP.finditer(value):
        key = match.group(1)
        if not key:
            raise ParseError(f"Invalid Cache-Control directive: {match.group(0)!r}")

        quoted, unquoted = match.group(2), match.group(3)
        if quoted is not None:
            directives[key.lower()] = quoted
        elif unquoted is not None:
            directives[key.lower()] = unquoted.strip()
        else:
            directives[key.lower()] = None

    return directives


def parse_cache_control(value: Optional[str]) -> CacheControl:
    """
    Parse a Cache-Control family header value.

    Args:
        value: The raw header value, or None when the header is missing

    Returns:
        CacheControl object with parsed directives

    Examples:
        >>> cc = parse_cache_control("public, max-age=3600, must-revalidate")
        >>> cc.public
        True
        >>> cc.max_age
        3600
        >>> cc.no_store is None
        True

        >>> cc = parse_cache_control("max-age=3600, durable")
        >>> cc.extensions
        {'durable': None}

        >>> parse_cache_control(None) == parse_cache_control("")
        True
    """
    if not value:
        return CacheControl()

    directives = tokenize(value)
    fields: Dict[str, Any] = {}
    extensions: Dict[str, Optional[str]] = {}

    for token, directive_value in directives.items():
        if token in DURATION_DIRECTIVES:
            fields[DURATION_DIRECTIVES[token]] = parse_int_value(directive_value)

        elif token in BOOLEAN_DIRECTIVES:
            fields[BOOLEAN_DIRECTIVES[token]] = True

        elif token == "max-stale":
            # max-stale without value means accept any stale response
            fields["max_stale"] = True
            fields["max_stale_duration"] = parse_int_value(directive_value)

        else:
            extensions[token] = directive_value

    return CacheControl(**fields, extensions=extensions)
