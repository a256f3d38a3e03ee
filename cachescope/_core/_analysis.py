from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Literal, Optional

from cachescope._core._cache_status import CacheStatusEntry, parse_cache_status
from cachescope._core._headers import (
    CacheControl,
    Headers,
    RawHeaders,
    Vary,
    ensure_headers,
    parse_cache_control,
    parse_int_value,
)
from cachescope._core._options import AnalysisOptions
from cachescope._core._served_by import ServedBy, get_served_by
from cachescope._core._ttl import get_time_to_live
from cachescope._utils import parse_date

logger = logging.getLogger("cachescope.core.analysis")

CACHE_HEADER_NAMES = (
    "Age",
    "CDN-Cache-Control",
    "Cache-Control",
    "Cache-Status",
    "Cache-Tag",
    "Content-Encoding",
    "Content-Language",
    "Content-Type",
    "Date",
    "ETag",
    "Expires",
    "Netlify-CDN-Cache-Control",
    "Netlify-Cache-Tag",
    "Netlify-Vary",
    "Vary",
    "X-BB-Deploy-Id",
    "X-BB-Gen",
    "X-BB-Host-Id",
    "X-NF-Cache-Info",
    "X-NF-Cache-Result",
    "X-NF-Edge-Functions",
    "X-NF-Function-Type",
    "X-Nextjs-Cache",
    "Debug-Netlify-CDN-Cache-Control",
    "Debug-X-BB-Deploy-Id",
    "Debug-X-BB-Gen",
    "Debug-X-BB-Host-Id",
    "Debug-X-NF-Cache-Info",
    "Debug-X-NF-Cache-Result",
    "Debug-X-NF-Edge-Functions",
    "Debug-X-NF-Function-Type",
)


@dataclass(frozen=True)
class ParsedCacheControl:
    # CDN and Netlify tier cacheability are not modelled yet, this only reflects `Cache-Control`.
    is_cacheable: bool
    age: Optional[int] = None
    date: Optional[datetime] = None
    etag: Optional[str] = None
    expires_at: Optional[datetime] = None
    ttl: Optional[float] = None
    cdn_ttl: Optional[float] = None
    netlify_cdn_ttl: Optional[float] = None
    vary: Optional[str] = None
    netlify_vary: Optional[str] = None
    revalidate: Optional[Literal["must-revalidate", "immutable"]] = None

    @property
    def vary_fields(self) -> List[str]:
        if self.vary is None:
            return []
        return Vary.from_value(self.vary).values


@dataclass(frozen=True)
class CacheAnalysis:
    served_by: ServedBy
    cache_status: List[CacheStatusEntry]
    cache_control: ParsedCacheControl


def first_max_age(*candidates: Optional[int]) -> Optional[int]:
    """Return the first directive value that is set, zero included."""
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def get_revalidate(cache_control: CacheControl) -> Optional[Literal["must-revalidate", "immutable"]]:
    if cache_control.must_revalidate:
        return "must-revalidate"
    if cache_control.immutable:
        return "immutable"
    return None


def parse_optional_date(headers: Headers, name: str) -> Optional[datetime]:
    value = headers.get(name)
    if not value:
        return None
    parsed = parse_date(value)
    if parsed is None:
        logger.debug(f"Ignoring {name} header that is not an HTTP-date: {value!r}")
    return parsed


def get_netlify_cdn_cache_control(headers: Headers, options: AnalysisOptions) -> Optional[str]:
    for name in options.netlify_cdn_cache_control_headers:
        if name in headers:
            return headers[name]
    return None


def parse_cache_headers(
    headers: RawHeaders,
    now: float,
    options: Optional[AnalysisOptions] = None,
) -> ParsedCacheControl:
    """
    Summarize the Cache-Control family headers of a response.

    Each tier uses the most specific directive available to it:

    - ``ttl`` (browsers): ``Cache-Control: max-age``
    - ``cdn_ttl``: ``CDN-Cache-Control`` s-maxage/max-age, then ``Cache-Control`` s-maxage/max-age
    - ``netlify_cdn_ttl``: ``Netlify-CDN-Cache-Control`` s-maxage/max-age, then the ``cdn_ttl`` chain

    ``now`` is in milliseconds since the epoch.
    """
    options = options or AnalysisOptions()
    cache_headers = ensure_headers(headers)

    cache_control = parse_cache_control(cache_headers.get("Cache-Control"))
    cdn_cache_control = parse_cache_control(cache_headers.get("CDN-Cache-Control"))
    netlify_cdn_cache_control = parse_cache_control(get_netlify_cdn_cache_control(cache_headers, options))

    age = parse_int_value(cache_headers.get("Age"))
    date = parse_optional_date(cache_headers, "Date")
    expires_at = parse_optional_date(cache_headers, "Expires")

    return ParsedCacheControl(
        is_cacheable=not (cache_control.private or cache_control.no_store or cache_control.no_cache),
        age=age,
        date=date,
        etag=cache_headers.get("ETag"),
        expires_at=expires_at,
        ttl=get_time_to_live(age, date, expires_at, cache_control.max_age, now),
        cdn_ttl=get_time_to_live(
            age,
            date,
            expires_at,
            first_max_age(
                cdn_cache_control.shared_max_age,
                cdn_cache_control.max_age,
                cache_control.shared_max_age,
                cache_control.max_age,
            ),
            now,
        ),
        netlify_cdn_ttl=get_time_to_live(
            age,
            date,
            expires_at,
            first_max_age(
                netlify_cdn_cache_control.shared_max_age,
                netlify_cdn_cache_control.max_age,
                cdn_cache_control.shared_max_age,
                cdn_cache_control.max_age,
                cache_control.shared_max_age,
                cache_control.max_age,
            ),
            now,
        ),
        vary=cache_headers.get("Vary"),
        netlify_vary=cache_headers.get("Netlify-Vary"),
        revalidate=get_revalidate(cache_control),
    )


def get_cache_analysis(
    headers: RawHeaders,
    now: float,
    options: Optional[AnalysisOptions] = None,
) -> CacheAnalysis:
    """
    Explain the caching behavior of a response from its headers.

    Parameters:
    ----------
    headers : Headers | Mapping[str, str]
        Response headers; names are matched case-insensitively
    now : float
        Reference time in milliseconds since the epoch, used for every TTL
    options : Optional[AnalysisOptions]
        Cache layer and debug header names, defaults when None

    Raises:
    ------
    UndeterminedServedBy
        When the serving component can't be determined. This is never replaced
        by a fallback guess.

    Examples:
    --------
    >>> analysis = get_cache_analysis({"Cache-Status": '"Netlify Edge"; hit'}, now=0)
    >>> analysis.served_by.source
    <ServedBySource.CDN: 'CDN'>
    >>> analysis.served_by.cdn_nodes
    'unknown CDN node'
    """
    options = options or AnalysisOptions()
    cache_headers = ensure_headers(headers)

    cache_status = parse_cache_status(cache_headers.get("Cache-Status", ""), options)

    return CacheAnalysis(
        served_by=get_served_by(cache_headers, cache_status, options),
        cache_status=cache_status,
        cache_control=parse_cache_headers(cache_headers, now, options),
    )


def get_cache_headers(headers: RawHeaders) -> Dict[str, str]:
    """
    Keep only the response headers relevant to caching, under their canonical names.

    Example:
        ```
        get_cache_headers({"cache-control": "no-store", "content-length": "12"})
        # {"Cache-Control": "no-store"}
        ```
    """
    cache_headers = ensure_headers(headers)
    return {name: cache_headers[name] for name in CACHE_HEADER_NAMES if name in cache_headers}
