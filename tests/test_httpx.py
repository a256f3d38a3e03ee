import httpx
import pytest

from cachescope import ServedBySource, UndeterminedServedBy, get_cache_analysis
from cachescope.httpx import analyze_response, httpx_to_internal

NOW = 1_445_412_480_000


def test_analyze_response() -> None:
    response = httpx.Response(
        200,
        headers={
            "Cache-Control": "public, max-age=3600, must-revalidate",
            "Age": "1800",
            "Cache-Status": '"Netlify Edge"; hit',
            "Debug-X-BB-Host-Id": "node1.example.com",
        },
    )

    analysis = analyze_response(response, NOW)

    assert analysis.served_by.source is ServedBySource.CDN
    assert analysis.served_by.cdn_nodes == "node1.example.com"
    assert analysis.cache_control.ttl == 1800
    assert analysis.cache_control.revalidate == "must-revalidate"
    assert analysis == get_cache_analysis(dict(response.headers), NOW)


def test_repeated_header_fields_are_joined() -> None:
    response = httpx.Response(
        200,
        headers=[
            ("Cache-Status", '"Netlify Durable"; hit'),
            ("Debug-X-BB-Host-Id", "node1"),
            ("Debug-X-BB-Host-Id", "node1, node2"),
        ],
    )

    analysis = analyze_response(response, NOW)

    assert analysis.served_by.source is ServedBySource.DURABLE_CACHE
    assert analysis.served_by.cdn_nodes == "node1, node2"


def test_httpx_to_internal() -> None:
    headers = httpx_to_internal(httpx.Headers([("Vary", "Accept"), ("vary", "Cookie")]))

    assert headers.get_list("VARY") == ["Accept", "Cookie"]


def test_undetermined() -> None:
    with pytest.raises(UndeterminedServedBy):
        analyze_response(httpx.Response(200), NOW)
