from __future__ import annotations

from datetime import datetime
from typing import Optional

from cachescope._utils import to_milliseconds


def get_time_to_live(
    age: Optional[int],
    date: Optional[datetime],
    expires_at: Optional[datetime],
    max_age: Optional[int],
    now: float,
) -> Optional[float]:
    """
    Compute how many seconds a response stays fresh, relative to ``now``.

    The freshness lifetime comes from ``max_age`` when given (zero included),
    otherwise from ``expires_at`` measured against the response date. The
    current age comes from the ``Age`` header when given, otherwise from the
    time elapsed since ``date``.

    RFC 9111 Section 4.2.1: Calculating Freshness Lifetime
    https://www.rfc-editor.org/rfc/rfc9111.html#section-4.2.1

    Parameters:
    ----------
    age : Optional[int]
        Value of the ``Age`` header in seconds
    date : Optional[datetime]
        Value of the ``Date`` header
    expires_at : Optional[datetime]
        Value of the ``Expires`` header
    max_age : Optional[int]
        The ``max-age``/``s-maxage`` that applies to the cache tier
    now : float
        Reference time in milliseconds since the epoch

    Naive datetimes are read as UTC.

    Returns:
    -------
    Optional[float]
        Remaining seconds (negative once stale), or None when neither
        ``max_age`` nor ``expires_at`` is known.

    Known issue:
    -----------
    With only ``date`` and ``expires_at`` the age is taken as ``now - date``,
    so the result is ``expires_at - now`` and depends on ``now`` even though
    both inputs are absolute timestamps.

    Examples:
    --------
    >>> get_time_to_live(age=10, date=None, expires_at=None, max_age=25, now=0)
    15
    """
    effective_date = to_milliseconds(date) if date is not None else now
    effective_age = age if age is not None else (now - effective_date) / 1000
    truly_effective_date = effective_date if date is not None else now - 1000 * effective_age

    if max_age is not None:
        effective_max_age: Optional[float] = max_age
    elif expires_at is not None:
        effective_max_age = (to_milliseconds(expires_at) - truly_effective_date) / 1000
    else:
        effective_max_age = None

    if effective_max_age is None:
        return None
    return effective_max_age - effective_age
