"""nurlgen.generate.host
Hosts: DNS domain names, IPv4 addresses and bracketed IPv6 literals.
"""

import dataclasses
import ipaddress
import random

from typing import Self

from .chars import weighted_choice
from .components import ALPHA, DIGIT
from .config import check_positive
from .ip import ipv4, ipv6

_ALNUM: str = ALPHA + DIGIT
_LDH: str = _ALNUM + "-"

# A label is at most 63 characters: one letter, up to 61 in the middle, one at the end.
_MAX_LABEL_MIDDLE: int = 61


def _label_remainder(rng: random.Random) -> str:
    if rng.random() < 0.5:
        # Zero or one alphanumeric.
        return rng.choice(_ALNUM) if rng.random() < 0.5 else ""
    middle: str = "".join(rng.choice(_LDH) for _ in range(rng.randint(0, _MAX_LABEL_MIDDLE)))
    return middle + rng.choice(_ALNUM)


def domain_label(rng: random.Random) -> str:
    """A letter, then letters, digits and hyphens, never ending in a hyphen. 1 to 63 characters."""
    return rng.choice(ALPHA) + _label_remainder(rng)


def domain(rng: random.Random, max_label_count: int) -> str:
    """1 to max_label_count labels joined by ".", sometimes with a leading "." (the root)."""
    check_positive("max_label_count", max_label_count)
    root: str = "." if rng.random() < 0.5 else ""
    return root + ".".join(domain_label(rng) for _ in range(rng.randint(1, max_label_count)))


@dataclasses.dataclass(frozen=True)
class DomainHost:
    text: str


@dataclasses.dataclass(frozen=True)
class Ipv4Host:
    address: ipaddress.IPv4Address
    text: str


@dataclasses.dataclass(frozen=True)
class Ipv6Host:
    """text is the IP-literal, with its brackets."""

    address: ipaddress.IPv6Address
    text: str

    @property
    def address_text(self: Self) -> str:
        return self.text[1:-1]


Host = DomainHost | Ipv4Host | Ipv6Host


def domain_host(rng: random.Random, max_label_count: int) -> DomainHost:
    return DomainHost(domain(rng, max_label_count))


def ipv4_host(rng: random.Random) -> Ipv4Host:
    address, text = ipv4(rng)
    return Ipv4Host(address, text)


def ipv6_host(rng: random.Random) -> Ipv6Host:
    """IP-literal = "[" IPv6address "]" """
    address, text = ipv6(rng)
    return Ipv6Host(address, f"[{text}]")


def host(rng: random.Random, max_label_count: int) -> Host:
    """host = IP-literal / IPv4address / reg-name, each a third of the time."""
    check_positive("max_label_count", max_label_count)
    return weighted_choice(
        rng,
        (
            (1, lambda r: domain_host(r, max_label_count)),
            (1, ipv4_host),
            (1, ipv6_host),
        ),
    )
