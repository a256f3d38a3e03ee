from cachescope._core._analysis import (
    CacheAnalysis as CacheAnalysis,
    ParsedCacheControl as ParsedCacheControl,
    get_cache_analysis as get_cache_analysis,
    get_cache_headers as get_cache_headers,
    parse_cache_headers as parse_cache_headers,
)
from cachescope._core._cache_status import (
    CacheStatusEntry as CacheStatusEntry,
    CacheStatusParameters as CacheStatusParameters,
    ForwardReason as ForwardReason,
    parse_cache_status as parse_cache_status,
)
from cachescope._core._headers import (
    CacheControl as CacheControl,
    Headers as Headers,
    parse_cache_control as parse_cache_control,
)
from cachescope._core._options import AnalysisOptions as AnalysisOptions
from cachescope._core._served_by import (
    ServedBy as ServedBy,
    ServedBySource as ServedBySource,
    get_served_by as get_served_by,
)
from cachescope._core._ttl import get_time_to_live as get_time_to_live

__all__ = (
    ## Analysis
    "CacheAnalysis",
    "ParsedCacheControl",
    "get_cache_analysis",
    "get_cache_headers",
    "parse_cache_headers",
    ## Cache-Status
    "CacheStatusEntry",
    "CacheStatusParameters",
    "ForwardReason",
    "parse_cache_status",
    ## Headers
    "CacheControl",
    "Headers",
    "parse_cache_control",
    ## Served by
    "ServedBy",
    "ServedBySource",
    "get_served_by",
    ## Freshness
    "get_time_to_live",
    ## Options
    "AnalysisOptions",
)
