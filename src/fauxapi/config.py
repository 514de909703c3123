"""Engine configuration.

MockConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups. Shared state is not part of the config: it is
owned by the ``Mock`` instance.
"""

from dataclasses import dataclass
from typing import TypeAlias

from fauxapi.errors import ConfigurationError

# Fixed milliseconds, or an inclusive (low, high) range
Delay: TypeAlias = int | float | tuple[int | float, int | float]


def normalize_namespace(namespace: str | None) -> str:
    """Normalize a namespace prefix.

    ``""``, ``"/"`` and ``None`` all mean "no namespace" and return ``""``.
    Otherwise the result has exactly one leading slash and no trailing slash::

        "api/v1/" -> "/api/v1"
    """
    if not namespace:
        return ""
    stripped = namespace.strip("/")
    if not stripped:
        return ""
    return f"/{stripped}"


@dataclass(frozen=True, slots=True)
class MockConfig:
    """Engine configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = MockConfig(namespace="/api/v1", delay=(50, 200), debug=True)
    """

    # Path prefix every route is implicitly mounted under
    namespace: str = ""

    # Response delay in milliseconds
    delay: Delay | None = None

    # Structured tracing of every request stage
    debug: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "namespace", normalize_namespace(self.namespace))
        delay = self.delay
        if delay is None:
            return
        if isinstance(delay, list):
            delay = tuple(delay)
            object.__setattr__(self, "delay", delay)
        if isinstance(delay, tuple):
            if len(delay) != 2 or not all(_is_number(v) for v in delay):
                msg = f"delay range must be a (low, high) pair of numbers, got {delay!r}"
                raise ConfigurationError(msg, context={"delay": delay})
        elif not _is_number(delay):
            msg = f"delay must be a number of milliseconds or a (low, high) pair, got {delay!r}"
            raise ConfigurationError(msg, context={"delay": delay})


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)
