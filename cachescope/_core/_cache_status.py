from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from cachescope._core._options import AnalysisOptions

logger = logging.getLogger("cachescope.core.cache_status")

INTEGER_REGEXP = re.compile(r"[0-9]+")


class ForwardReason(str, enum.Enum):
    """
    Why a cache forwarded the request towards the origin.

    RFC 9211 Section 2.2: The fwd parameter
    https://www.rfc-editor.org/rfc/rfc9211.html#section-2.2
    """

    BYPASS = "bypass"
    METHOD = "method"
    URI_MISS = "uri-miss"
    VARY_MISS = "vary-miss"
    MISS = "miss"
    REQUEST = "request"
    STALE = "stale"
    PARTIAL = "partial"


@dataclass(frozen=True)
class CacheStatusParameters:
    hit: bool = False
    fwd: Optional[ForwardReason] = None
    fwd_status: Optional[int] = None
    ttl: Optional[int] = None
    stored: bool = False
    collapsed: bool = False
    key: Optional[str] = None
    detail: Optional[str] = None


@dataclass(frozen=True)
class CacheStatusEntry:
    cache_name: str
    parameters: CacheStatusParameters


def parse_integer_parameter(value: Optional[str]) -> Optional[int]:
    if value is None or not INTEGER_REGEXP.fullmatch(value):
        return None
    return int(value)


def parse_forward_reason(value: Optional[str], entry: str) -> Optional[ForwardReason]:
    if value is None:
        return None
    try:
        return ForwardReason(value)
    except ValueError:
        logger.warning(f"Ignoring unknown forward reason {value!r} in cache status entry {entry!r}")
        return None


def unquote_cache_name(cache_name: str) -> str:
    if len(cache_name) >= 2 and cache_name[0] == '"' and cache_name[-1] == '"':
        return cache_name[1:-1]
    return cache_name


def parse_entry(entry: str) -> Optional[CacheStatusEntry]:
    cache_name, *parameters = [part.strip() for part in entry.split("; ")]

    if not cache_name or not parameters:
        logger.warning(f"Ignoring invalid cache status entry {entry!r}")
        return None

    parameters_by_key: Dict[str, Optional[str]] = {}
    for parameter in parameters:
        key, separator, value = parameter.partition("=")
        if not key:
            logger.warning(f"Ignoring invalid parameter {parameter!r} in cache status entry {entry!r}")
            continue
        parameters_by_key[key] = value if separator else None

    return CacheStatusEntry(
        cache_name=unquote_cache_name(cache_name),
        parameters=CacheStatusParameters(
            hit="hit" in parameters_by_key,
            fwd=parse_forward_reason(parameters_by_key.get("fwd"), entry),
            fwd_status=parse_integer_parameter(parameters_by_key.get("fwd-status")),
            ttl=parse_integer_parameter(parameters_by_key.get("ttl")),
            stored="stored" in parameters_by_key,
            collapsed="collapsed" in parameters_by_key,
            key=parameters_by_key.get("key"),
            detail=parameters_by_key.get("detail"),
        ),
    )


def parse_cache_status(
    cache_status: str,
    options: Optional[AnalysisOptions] = None,
) -> List[CacheStatusEntry]:
    """
    Parse a ``Cache-Status`` header into entries ordered from the user to the origin.

    RFC 9211 lists caches "in order of their proximity to the origin server",
    but when reading what happened to a request you want to start from
    yourself, so the result is reversed.

    Some layers don't respect the RFC ordering, so before reversing, known
    cache names are put back into ``options.cache_name_order``. Unknown names
    sort before every known one and keep their relative order.

    Invalid segments (no cache name, or no parameters) are logged and skipped.

    Examples:
        >>> entries = parse_cache_status('"Netlify Edge"; fwd=miss, "Next.js"; hit')
        >>> [entry.cache_name for entry in entries]
        ['Netlify Edge', 'Next.js']
    """
    options = options or AnalysisOptions()

    if not cache_status:
        return []

    entries = [parsed for parsed in (parse_entry(entry) for entry in cache_status.split(", ")) if parsed is not None]

    def precedence(entry: CacheStatusEntry) -> int:
        try:
            return options.cache_name_order.index(entry.cache_name)
        except ValueError:
            return -1

    entries.sort(key=precedence)
    entries.reverse()
    return entries
