#!/usr/bin/env uv run
# /// script
# requires-python = ">=3.9"
# dependencies = [
#     "cachescope[httpx]",
# ]
#
# [tool.uv.sources]
# cachescope = { path = "../", editable = true }
# ///

import time

import httpx

from cachescope import UndeterminedServedBy
from cachescope.httpx import analyze_response


def inspect_and_print(url: str):
    print(f"\n➡ Sending request to {url}...")
    response = httpx.get(url, headers={"x-nf-debug-logging": "1"})
    now = time.time() * 1000

    try:
        analysis = analyze_response(response, now)
    except UndeterminedServedBy as exc:
        print(f"❓ {exc}")
        return

    print(f"🚀 Served By: {analysis.served_by.source.value} ({analysis.served_by.cdn_nodes})")
    for entry in analysis.cache_status:
        outcome = "hit" if entry.parameters.hit else f"fwd={entry.parameters.fwd and entry.parameters.fwd.value}"
        print(f"   {entry.cache_name}: {outcome}")
    print(f"📦 Cacheable: {analysis.cache_control.is_cacheable}")
    print(f"⏰ TTL: {analysis.cache_control.ttl} (CDN: {analysis.cache_control.cdn_ttl})")
    print(f"🔄 Revalidate: {analysis.cache_control.revalidate}")


if __name__ == "__main__":
    inspect_and_print("https://www.netlify.com/")
