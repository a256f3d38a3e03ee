from cachescope._core import (
    AnalysisOptions as AnalysisOptions,
    CacheAnalysis as CacheAnalysis,
    CacheControl as CacheControl,
    CacheStatusEntry as CacheStatusEntry,
    CacheStatusParameters as CacheStatusParameters,
    ForwardReason as ForwardReason,
    Headers as Headers,
    ParsedCacheControl as ParsedCacheControl,
    ServedBy as ServedBy,
    ServedBySource as ServedBySource,
    get_cache_analysis as get_cache_analysis,
    get_cache_headers as get_cache_headers,
    get_served_by as get_served_by,
    get_time_to_live as get_time_to_live,
    parse_cache_control as parse_cache_control,
    parse_cache_headers as parse_cache_headers,
    parse_cache_status as parse_cache_status,
)
from cachescope._exceptions import (
    CacheScopeError as CacheScopeError,
    ParseError as ParseError,
    UndeterminedServedBy as UndeterminedServedBy,
)

__version__ = "0.1.0"

__all__ = (
    ## Analysis
    "get_cache_analysis",
    "parse_cache_headers",
    "get_cache_headers",
    "CacheAnalysis",
    "ParsedCacheControl",
    ## Parsers
    "parse_cache_control",
    "parse_cache_status",
    "CacheControl",
    "CacheStatusEntry",
    "CacheStatusParameters",
    "ForwardReason",
    ## Served by
    "get_served_by",
    "ServedBy",
    "ServedBySource",
    ## Freshness
    "get_time_to_live",
    ## Headers
    "Headers",
    ## Options
    "AnalysisOptions",
    ## Exceptions
    "CacheScopeError",
    "ParseError",
    "UndeterminedServedBy",
)
