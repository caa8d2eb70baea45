"""nurlgen.generate.config
Size bounds shared by the generators.
"""

import dataclasses
import logging

from typing import Any, Self

_LOGGER: logging.Logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """A generation bound is outside of its documented domain."""


def check_positive(name: str, value: int) -> int:
    if value < 1:
        raise ConfigError(f"{name} must be at least 1, got {value}")
    return value


def check_bounds(name: str, lo: int, hi: int) -> tuple[int, int]:
    if lo < 0 or hi < lo:
        raise ConfigError(f"{name} must satisfy 0 <= min <= max, got {lo}..{hi}")
    return lo, hi


@dataclasses.dataclass(frozen=True)
class GeneratorConfig:
    """Bounds for every generator that produces a variable number of things.
    Character bounds are inclusive maxima; the minimum is set by the grammar rule.
    """

    max_label_count: int = 20
    max_segments: int = 50
    query_count_range: tuple[int, int] = (0, 20)
    max_segment_chars: int = 49
    max_query_chars: int = 50
    max_fragment_chars: int = 125
    max_userinfo_chars: int = 50

    def __post_init__(self: Self) -> None:
        check_positive("max_label_count", self.max_label_count)
        check_positive("max_segments", self.max_segments)
        # segment-nz needs room for one character.
        check_positive("max_segment_chars", self.max_segment_chars)
        check_bounds("query_count_range", *self.query_count_range)
        for name in ("max_query_chars", "max_fragment_chars", "max_userinfo_chars"):
            check_bounds(name, 0, getattr(self, name))
        _LOGGER.debug("validated %r", self)

    def replace(self: Self, **changes: Any) -> Self:
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG: GeneratorConfig = GeneratorConfig()
