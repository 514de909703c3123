"""Response delay.

A delay is either a fixed number of milliseconds or an inclusive
``(low, high)`` range sampled uniformly per request. Reversed ranges are
swapped, degenerate ranges behave as fixed, negative values mean no wait.
"""

import random

import anyio

from fauxapi.config import Delay


def resolve_delay(delay: Delay | None, *, rng: random.Random | None = None) -> float:
    """Return the delay to apply, in seconds."""
    if delay is None:
        return 0.0
    if isinstance(delay, tuple | list):
        low, high = delay
        if low > high:
            low, high = high, low
        millis = low if low == high else (rng or random).uniform(low, high)
    else:
        millis = delay
    return max(0.0, float(millis)) / 1000


async def apply_delay(delay: Delay | None, *, rng: random.Random | None = None) -> float:
    """Sleep for the configured delay. Returns the seconds waited."""
    seconds = resolve_delay(delay, rng=rng)
    if seconds > 0:
        await anyio.sleep(seconds)
    return seconds
