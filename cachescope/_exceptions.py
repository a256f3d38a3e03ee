from __future__ import annotations

import typing as tp

if tp.TYPE_CHECKING:
    from cachescope._core._cache_status import CacheStatusEntry

__all__ = ("CacheScopeError", "ParseError", "UndeterminedServedBy")


class CacheScopeError(Exception): ...


class ParseError(CacheScopeError): ...


class UndeterminedServedBy(CacheScopeError):
    def __init__(self, cache_status: tp.Sequence[CacheStatusEntry]) -> None:
        self.cache_status = list(cache_status)
        super().__init__(f"Could not determine who served the request. Cache status: {self.cache_status!r}")
