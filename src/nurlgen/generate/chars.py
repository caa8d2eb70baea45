"""nurlgen.generate.chars
Splits the Unicode scalar-value space into the characters a URI component may carry
literally and the ones it has to percent-encode, and draws characters from both sides.
"""

import dataclasses
import logging
import random
import threading

from typing import Callable, Iterable, Self, Sequence, TypeVar

from .config import check_bounds

_LOGGER: logging.Logger = logging.getLogger(__name__)

_T = TypeVar("_T")

# The largest Unicode scalar value.
MAX_SCALAR: int = 0x10FFFF

# Surrogates are code points, not scalar values: they have no UTF-8 encoding.
_SURROGATE_MIN: int = 0xD800
_SURROGATE_MAX: int = 0xDFFF
_SURROGATE_COUNT: int = _SURROGATE_MAX - _SURROGATE_MIN + 1

# A URI component carries a character literally 98 times out of 100.
SAFE_WEIGHT: int = 98
UNSAFE_WEIGHT: int = 2


def _is_scalar(cp: int) -> bool:
    return 0 <= cp <= MAX_SCALAR and not _SURROGATE_MIN <= cp <= _SURROGATE_MAX


def _next_scalar(cp: int) -> int:
    """The scalar value right after cp, stepping over the surrogate block."""
    return _SURROGATE_MAX + 1 if cp == _SURROGATE_MIN - 1 else cp + 1


def _prev_scalar(cp: int) -> int:
    """The scalar value right before cp, stepping over the surrogate block."""
    return _SURROGATE_MIN - 1 if cp == _SURROGATE_MAX + 1 else cp - 1


@dataclasses.dataclass(frozen=True)
class CodePointRange:
    """An inclusive range of scalar values. Surrogates inside [lo, hi] are not members."""

    lo: int
    hi: int

    def __post_init__(self: Self) -> None:
        if not (_is_scalar(self.lo) and _is_scalar(self.hi)):
            raise ValueError(f"range bounds must be scalar values, got {self.lo:#x}..{self.hi:#x}")
        if self.lo > self.hi:
            raise ValueError(f"empty range {self.lo:#x}..{self.hi:#x}")

    def _spans_surrogates(self: Self) -> bool:
        return self.lo < _SURROGATE_MIN and self.hi > _SURROGATE_MAX

    def __len__(self: Self) -> int:
        length: int = self.hi - self.lo + 1
        if self._spans_surrogates():
            length -= _SURROGATE_COUNT
        return length

    def __contains__(self: Self, cp: object) -> bool:
        return isinstance(cp, int) and _is_scalar(cp) and self.lo <= cp <= self.hi

    def nth(self: Self, index: int) -> int:
        """The index-th scalar value of the range, counting from 0."""
        if not 0 <= index < len(self):
            raise IndexError(index)
        cp: int = self.lo + index
        if self._spans_surrogates() and cp >= _SURROGATE_MIN:
            cp += _SURROGATE_COUNT
        return cp


def unsafe_ranges_of(safe: Iterable[int]) -> tuple[CodePointRange, ...]:
    """Computes the complement of safe over the scalar-value space as maximal sorted ranges.
    e.g. unsafe_ranges_of([ord("a")]) == (CodePointRange(0x00, 0x60), CodePointRange(0x62, 0x10FFFF))
    """
    points: list[int] = sorted(set(safe))
    for cp in points:
        if not _is_scalar(cp):
            raise ValueError(f"{cp:#x} is not a Unicode scalar value")

    if len(points) == 0:
        return (CodePointRange(0, MAX_SCALAR),)

    result: list[CodePointRange] = []
    if points[0] > 0:
        result.append(CodePointRange(0, _prev_scalar(points[0])))
    for current, following in zip(points, points[1:]):
        if _next_scalar(current) < following:
            result.append(CodePointRange(_next_scalar(current), _prev_scalar(following)))
    if points[-1] < MAX_SCALAR:
        result.append(CodePointRange(_next_scalar(points[-1]), MAX_SCALAR))
    return tuple(result)


def percent_encode(char: str) -> str:
    """Returns the percent-encoded form of each UTF-8 byte of char.
    e.g. percent_encode("é") == "%c3%a9"
    """
    return "".join(f"%{byte:02x}" for byte in char.encode("utf-8"))


@dataclasses.dataclass(frozen=True)
class Normal:
    """A character emitted as itself."""

    char: str


@dataclasses.dataclass(frozen=True)
class PercentEncoded:
    """A character emitted as its %xx escape sequence."""

    text: str


GeneratedChar = Normal | PercentEncoded


def render(chars: Iterable[GeneratedChar]) -> str:
    result: str = ""
    for c in chars:
        if isinstance(c, Normal):
            result += c.char
        elif isinstance(c, PercentEncoded):
            result += c.text
        else:
            raise TypeError(f"not a generated character: {c!r}")
    return result


def weighted_choice(rng: random.Random, table: Sequence[tuple[int, Callable[[random.Random], _T]]]) -> _T:
    """Picks one generator from a table of (weight, generator) pairs and runs it.
    Entries with weight 0 are never picked.
    """
    if any(weight < 0 for weight, _ in table):
        raise ValueError("weights must be non-negative")
    total: int = sum(weight for weight, _ in table)
    if total <= 0:
        raise ValueError("at least one weight must be positive")
    point: int = rng.randrange(total)
    for weight, generator in table:
        if point < weight:
            return generator(rng)
        point -= weight
    raise AssertionError("unreachable")


class CharacterClass:
    """A fixed set of characters a component carries literally.
    Everything else in the scalar-value space is unsafe and gets percent-encoded.
    The unsafe ranges are computed once, on first use, and never change afterwards.
    """

    def __init__(self: Self, name: str, safe: Iterable[str]) -> None:
        self.name: str = name
        self.safe: tuple[str, ...] = tuple(sorted(set(safe)))
        self._unsafe: tuple[CodePointRange, ...] | None = None
        self._lock: threading.Lock = threading.Lock()

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({self.name!r}, {''.join(self.safe)!r})"

    @property
    def unsafe_ranges(self: Self) -> tuple[CodePointRange, ...]:
        if self._unsafe is None:
            with self._lock:
                if self._unsafe is None:
                    self._unsafe = unsafe_ranges_of(map(ord, self.safe))
                    _LOGGER.debug("%s: %d unsafe ranges", self.name, len(self._unsafe))
        return self._unsafe

    def is_safe(self: Self, char: str) -> bool:
        return char in self.safe

    def safe_char(self: Self, rng: random.Random) -> Normal:
        return Normal(rng.choice(self.safe))

    def unsafe_char(self: Self, rng: random.Random) -> PercentEncoded:
        ranges: tuple[CodePointRange, ...] = self.unsafe_ranges
        if len(ranges) == 0:
            raise ValueError(f"{self.name} has no unsafe characters")
        chosen: CodePointRange = rng.choice(ranges)
        return PercentEncoded(percent_encode(chr(chosen.nth(rng.randrange(len(chosen))))))

    def generate(self: Self, rng: random.Random) -> GeneratedChar:
        return weighted_choice(
            rng,
            (
                (SAFE_WEIGHT if len(self.safe) > 0 else 0, self.safe_char),
                (UNSAFE_WEIGHT if len(self.unsafe_ranges) > 0 else 0, self.unsafe_char),
            ),
        )

    def generate_string(self: Self, rng: random.Random, min_chars: int, max_chars: int) -> list[GeneratedChar]:
        """Between min_chars and max_chars (both inclusive) generated characters."""
        check_bounds(f"{self.name} length", min_chars, max_chars)
        return [self.generate(rng) for _ in range(rng.randint(min_chars, max_chars))]
