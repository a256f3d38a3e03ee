from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class AnalysisOptions:
    """
    Configuration for how response headers are interpreted.

    The defaults describe a Netlify deployment: an edge cache layer, an opt-in
    durable cache layer and a Next.js application cache, plus the debug headers
    Netlify returns when a request carries ``x-nf-debug-logging``.

    Attributes:
    ----------
    edge_cache_name : str
        The ``Cache-Status`` cache name of the CDN edge layer.

        A hit on this layer means the response came from the edge cache. A lone
        miss on this layer means the request was forwarded to the origin.

        Default: "Netlify Edge"

    durable_cache_name : str
        The ``Cache-Status`` cache name of the regionally shared durable layer.

        Default: "Netlify Durable"

    cache_name_order : tuple[str, ...]
        Known cache names ordered from the origin to the user.

        RFC 9211 Section 2: The Cache-Status HTTP Response Header Field
        https://www.rfc-editor.org/rfc/rfc9211.html#section-2

        "The list members identify each cache that has handled the request,
        in order of their proximity to the origin server."

        Some layers append themselves out of order, so parsed entries are
        re-sorted by their position in this tuple before being presented.
        Names not listed here sort before every listed name.

        Examples:
        --------
        >>> options = AnalysisOptions()
        >>> options.cache_name_order
        ('Next.js', 'Netlify Durable', 'Netlify Edge')

    function_type_header : str
        Header present when a serverless function produced the response.

    edge_functions_header : str
        Header present when one or more edge functions ran for the request.

    cdn_host_header : str
        Header listing the CDN nodes that handled the request, ``", "`` separated.

    unknown_cdn_node : str
        Value reported for the CDN nodes when ``cdn_host_header`` is missing.

    netlify_cdn_cache_control_headers : tuple[str, ...]
        Header names carrying the Netlify-tier cache control directives, in
        lookup order. The first one present is used.
    """

    edge_cache_name: str = "Netlify Edge"
    durable_cache_name: str = "Netlify Durable"

    cache_name_order: tuple[str, ...] = field(default_factory=lambda: ("Next.js", "Netlify Durable", "Netlify Edge"))
    """Known cache names, closest to the origin first."""

    function_type_header: str = "Debug-X-NF-Function-Type"
    edge_functions_header: str = "Debug-X-NF-Edge-Functions"
    cdn_host_header: str = "Debug-X-BB-Host-Id"
    unknown_cdn_node: str = "unknown CDN node"

    netlify_cdn_cache_control_headers: tuple[str, ...] = field(
        default_factory=lambda: ("Netlify-CDN-Cache-Control", "Debug-Netlify-CDN-Cache-Control")
    )
