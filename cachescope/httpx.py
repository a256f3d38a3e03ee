from __future__ import annotations

from typing import Optional

try:
    import httpx
except ImportError as e:
    raise ImportError(
        "httpx is required to use cachescope.httpx module. "
        "Please install cachescope with the 'httpx' extra, "
        "e.g., 'pip install cachescope[httpx]'."
    ) from e

from cachescope._core._analysis import CacheAnalysis, get_cache_analysis
from cachescope._core._headers import Headers
from cachescope._core._options import AnalysisOptions


def httpx_to_internal(headers: httpx.Headers) -> Headers:
    """
    Convert httpx.Headers to internal Headers, keeping repeated fields apart.
    """
    internal = Headers({})
    for key, value in headers.multi_items():
        internal[key] = value
    return internal


def analyze_response(
    response: httpx.Response,
    now: float,
    options: Optional[AnalysisOptions] = None,
) -> CacheAnalysis:
    """
    Analyze the caching behavior of an already received httpx.Response.

    No request is sent. ``now`` is in milliseconds since the epoch.
    """
    return get_cache_analysis(httpx_to_internal(response.headers), now, options)
