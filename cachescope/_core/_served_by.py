from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from typing_extensions import assert_never

from cachescope._core._cache_status import CacheStatusEntry
from cachescope._core._headers import Headers, RawHeaders, ensure_headers
from cachescope._core._options import AnalysisOptions
from cachescope._exceptions import UndeterminedServedBy
from cachescope._utils import deduplicate

logger = logging.getLogger("cachescope.core.served_by")


class ServedBySource(str, enum.Enum):
    CDN = "CDN"
    CDN_ORIGIN = "CDN origin"
    DURABLE_CACHE = "Durable Cache"
    FUNCTION = "Function"
    EDGE_FUNCTION = "Edge Function"


@dataclass(frozen=True)
class ServedBy:
    source: ServedBySource
    cdn_nodes: str

    @property
    def is_cached(self) -> bool:
        """Whether the response was answered from a cache tier rather than computed."""
        if self.source is ServedBySource.CDN or self.source is ServedBySource.DURABLE_CACHE:
            return True
        elif (
            self.source is ServedBySource.CDN_ORIGIN
            or self.source is ServedBySource.FUNCTION
            or self.source is ServedBySource.EDGE_FUNCTION
        ):
            return False
        else:
            assert_never(self.source)


def get_served_by_source(
    headers: Headers,
    cache_status: Sequence[CacheStatusEntry],
    options: AnalysisOptions,
) -> ServedBySource:
    # `cache_status` runs from the cache closest to the user to the one closest to the origin,
    # so the first hit is the layer that answered.
    for entry in cache_status:
        if not entry.parameters.hit:
            continue

        if entry.cache_name == options.edge_cache_name:
            logger.debug(f"Served by CDN: cache hit on {entry.cache_name!r}")
            return ServedBySource.CDN
        if entry.cache_name == options.durable_cache_name:
            logger.debug(f"Served by durable cache: cache hit on {entry.cache_name!r}")
            return ServedBySource.DURABLE_CACHE

    # A Function response can also carry the edge functions header when middleware ran,
    # so the function check comes first.
    if options.function_type_header in headers:
        logger.debug(f"Served by function: {options.function_type_header!r} is present")
        return ServedBySource.FUNCTION

    if options.edge_functions_header in headers:
        logger.debug(f"Served by edge function: {options.edge_functions_header!r} is present")
        return ServedBySource.EDGE_FUNCTION

    if (
        len(cache_status) == 1
        and cache_status[0].cache_name == options.edge_cache_name
        and not cache_status[0].parameters.hit
    ):
        logger.debug("Served by CDN origin: single edge cache miss, no other layer consulted")
        return ServedBySource.CDN_ORIGIN

    raise UndeterminedServedBy(cache_status)


def fix_duplicated_cdn_nodes(unfixed_cdn_nodes: str) -> str:
    """
    Deduplicate the CDN host list, keeping the first occurrence of each node.

    The host header sometimes repeats the same node. A node can legitimately
    handle a request more than once, but that can't be told apart from the
    duplicates, so every repeat is dropped.
    """
    return ", ".join(deduplicate(unfixed_cdn_nodes.split(", ")))


def get_served_by(
    headers: RawHeaders,
    cache_status: Sequence[CacheStatusEntry],
    options: Optional[AnalysisOptions] = None,
) -> ServedBy:
    """
    Determine which component answered the request.

    Parameters:
    ----------
    headers : Headers | Mapping[str, str]
        Response headers; names are matched case-insensitively
    cache_status : Sequence[CacheStatusEntry]
        Parsed ``Cache-Status`` entries, closest to the user first
    options : Optional[AnalysisOptions]
        Cache layer and debug header names, defaults when None

    Returns:
    -------
    ServedBy
        The serving source and the deduplicated CDN nodes

    Raises:
    ------
    UndeterminedServedBy
        When neither a cache hit, a function header nor a lone edge miss
        explains the response.
    """
    options = options or AnalysisOptions()
    headers = ensure_headers(headers)

    source = get_served_by_source(headers, cache_status, options)
    unfixed_cdn_nodes = headers.get(options.cdn_host_header)
    if unfixed_cdn_nodes is None:
        unfixed_cdn_nodes = options.unknown_cdn_node

    return ServedBy(source=source, cdn_nodes=fix_duplicated_cdn_nodes(unfixed_cdn_nodes))
