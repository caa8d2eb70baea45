"""nurlgen.generate.ip
IPv4 and IPv6 addresses paired with one of their many valid textual forms.
The address and its text are always derived from the same rendering, so they cannot disagree.
"""

import dataclasses
import enum
import ipaddress
import random

from typing import Callable, Self

from .chars import weighted_choice

_HEXTET_COUNT: int = 8

# 80 zero bits then 16 one bits, in front of the IPv4 address.
_MAPPED_PREFIX: int = 0xFFFF << 32


@dataclasses.dataclass(frozen=True)
class Ipv4:
    address: ipaddress.IPv4Address

    @property
    def text(self: Self) -> str:
        # dec-octet forbids leading zeros, which is exactly what str() gives.
        return str(self.address)


def ipv4(rng: random.Random) -> tuple[ipaddress.IPv4Address, str]:
    """IPv4address = dec-octet "." dec-octet "." dec-octet "." dec-octet"""
    ip: Ipv4 = Ipv4(ipaddress.IPv4Address(bytes(rng.randrange(256) for _ in range(4))))
    return ip.address, ip.text


@dataclasses.dataclass(frozen=True)
class Hextet:
    """h16 = 1*4HEXDIG
    A 16-bit value zero-padded to at least width hex digits.
    """

    value: int
    width: int

    def __post_init__(self: Self) -> None:
        if not 0 <= self.value <= 0xFFFF:
            raise ValueError(f"{self.value:#x} does not fit in 16 bits")
        if not 1 <= self.width <= 4:
            raise ValueError(f"hextet width must be 1..4, got {self.width}")

    def __str__(self: Self) -> str:
        return f"{self.value:0{self.width}x}"


def hextet(rng: random.Random) -> Hextet:
    # Random zero padding exercises a parser's handling of non-canonical forms.
    return Hextet(rng.randrange(0x10000), rng.randint(1, 4))


def _hextets(rng: random.Random, count: int) -> tuple[Hextet, ...]:
    return tuple(hextet(rng) for _ in range(count))


class TextLayout(enum.Enum):
    UNCOMPRESSED = "uncompressed"
    COMPRESSED_START = "compressed-start"
    COMPRESSED_MIDDLE = "compressed-middle"
    COMPRESSED_END = "compressed-end"
    MAPPED_V4 = "mapped-v4"


@dataclasses.dataclass(frozen=True)
class Ipv6:
    """One textual layout of an IPv6 address.
    head holds the hextets written before "::" and tail the ones written after it.
    An uncompressed address keeps all 8 in head. A mapped address has neither and
    carries its low 32 bits in ipv4.
    """

    layout: TextLayout
    head: tuple[Hextet, ...] = ()
    tail: tuple[Hextet, ...] = ()
    ipv4: Ipv4 | None = None

    def __post_init__(self: Self) -> None:
        explicit: int = len(self.head) + len(self.tail)
        if self.layout is TextLayout.MAPPED_V4:
            if self.ipv4 is None or explicit != 0:
                raise ValueError("a mapped address needs an IPv4 address and no hextets")
            return
        if self.ipv4 is not None:
            raise ValueError(f"{self.layout.value} address cannot embed IPv4")
        if self.layout is TextLayout.UNCOMPRESSED:
            if len(self.head) != _HEXTET_COUNT or len(self.tail) != 0:
                raise ValueError("an uncompressed address needs exactly 8 leading hextets")
            return
        # "::" must stand for at least one zero hextet and there must be something besides it.
        if not 1 <= explicit <= _HEXTET_COUNT - 1:
            raise ValueError(f"compressed address must write 1..7 hextets, got {explicit}")
        if self.layout is TextLayout.COMPRESSED_START and len(self.head) != 0:
            raise ValueError("compressed-start address cannot have leading hextets")
        if self.layout is TextLayout.COMPRESSED_END and len(self.tail) != 0:
            raise ValueError("compressed-end address cannot have trailing hextets")
        if self.layout is TextLayout.COMPRESSED_MIDDLE and (len(self.head) == 0 or len(self.tail) == 0):
            raise ValueError("compressed-middle address needs hextets on both sides of '::'")

    @property
    def segments(self: Self) -> tuple[int, ...]:
        if self.ipv4 is not None:
            low: int = int(self.ipv4.address)
            return (0, 0, 0, 0, 0, 0xFFFF, low >> 16, low & 0xFFFF)
        zeros: tuple[int, ...] = (0,) * (_HEXTET_COUNT - len(self.head) - len(self.tail))
        return tuple(h.value for h in self.head) + zeros + tuple(h.value for h in self.tail)

    @property
    def address(self: Self) -> ipaddress.IPv6Address:
        if self.ipv4 is not None:
            return ipaddress.IPv6Address(_MAPPED_PREFIX | int(self.ipv4.address))
        result: int = 0
        for value in self.segments:
            result = (result << 16) | value
        return ipaddress.IPv6Address(result)

    @property
    def text(self: Self) -> str:
        if self.ipv4 is not None:
            return f"::ffff:{self.ipv4.text}"
        head: str = ":".join(map(str, self.head))
        if self.layout is TextLayout.UNCOMPRESSED:
            return head
        return f"{head}::{':'.join(map(str, self.tail))}"


def ipv6_uncompressed_layout(rng: random.Random) -> Ipv6:
    return Ipv6(TextLayout.UNCOMPRESSED, head=_hextets(rng, _HEXTET_COUNT))


def ipv6_compressed_start_layout(rng: random.Random) -> Ipv6:
    return Ipv6(TextLayout.COMPRESSED_START, tail=_hextets(rng, rng.randint(1, 7)))


def ipv6_compressed_end_layout(rng: random.Random) -> Ipv6:
    return Ipv6(TextLayout.COMPRESSED_END, head=_hextets(rng, rng.randint(1, 7)))


def ipv6_compressed_middle_layout(rng: random.Random) -> Ipv6:
    head: tuple[Hextet, ...] = _hextets(rng, rng.randint(1, 6))
    return Ipv6(TextLayout.COMPRESSED_MIDDLE, head=head, tail=_hextets(rng, rng.randint(1, 7 - len(head))))


def ipv6_mapped_ipv4_layout(rng: random.Random) -> Ipv6:
    address, _ = ipv4(rng)
    return Ipv6(TextLayout.MAPPED_V4, ipv4=Ipv4(address))


_LAYOUTS: dict[TextLayout, Callable[[random.Random], Ipv6]] = {
    TextLayout.UNCOMPRESSED: ipv6_uncompressed_layout,
    TextLayout.COMPRESSED_START: ipv6_compressed_start_layout,
    TextLayout.COMPRESSED_MIDDLE: ipv6_compressed_middle_layout,
    TextLayout.COMPRESSED_END: ipv6_compressed_end_layout,
    TextLayout.MAPPED_V4: ipv6_mapped_ipv4_layout,
}


def ipv6_layout(rng: random.Random, weights: dict[TextLayout, int] | None = None) -> Ipv6:
    """Picks a layout (uniformly unless weights says otherwise) and renders a random address in it."""
    return weighted_choice(
        rng,
        [(1 if weights is None else weights.get(layout, 0), generate) for layout, generate in _LAYOUTS.items()],
    )


def _pair(ip: Ipv6) -> tuple[ipaddress.IPv6Address, str]:
    return ip.address, ip.text


def ipv6_uncompressed(rng: random.Random) -> tuple[ipaddress.IPv6Address, str]:
    return _pair(ipv6_uncompressed_layout(rng))


def ipv6_compressed_start(rng: random.Random) -> tuple[ipaddress.IPv6Address, str]:
    return _pair(ipv6_compressed_start_layout(rng))


def ipv6_compressed_middle(rng: random.Random) -> tuple[ipaddress.IPv6Address, str]:
    return _pair(ipv6_compressed_middle_layout(rng))


def ipv6_compressed_end(rng: random.Random) -> tuple[ipaddress.IPv6Address, str]:
    return _pair(ipv6_compressed_end_layout(rng))


def ipv6_mapped_ipv4(rng: random.Random) -> tuple[ipaddress.IPv6Address, str]:
    return _pair(ipv6_mapped_ipv4_layout(rng))


def ipv6(rng: random.Random) -> tuple[ipaddress.IPv6Address, str]:
    return _pair(ipv6_layout(rng))
