"""nurlgen.generate.strategies
Hypothesis strategies over every generator in this package.

Each strategy draws a seeded random.Random from Hypothesis and hands it to a generator,
so failing examples replay from Hypothesis' database like any other strategy.
"""

import ipaddress
import random

from typing import Callable, TypeVar

from hypothesis import strategies as st

from .components import QueryParam, UserInfo, fragment, query, user_info
from .config import DEFAULT_CONFIG, GeneratorConfig, check_bounds, check_positive
from .host import Host, domain, host
from .ip import Ipv6, TextLayout, ipv4, ipv6_layout
from .path import Path, path_absolute, path_rootless
from .request_line import RequestLine, request_line
from .target import Authority, RequestTarget, authority, request_target

_T = TypeVar("_T")


def from_generator(generate: Callable[[random.Random], _T]) -> st.SearchStrategy[_T]:
    return st.randoms(use_true_random=False).map(generate)


def ipv4_addresses() -> st.SearchStrategy[tuple[ipaddress.IPv4Address, str]]:
    return from_generator(ipv4)


def ipv6_addresses(
    layouts: tuple[TextLayout, ...] = tuple(TextLayout),
) -> st.SearchStrategy[tuple[ipaddress.IPv6Address, str]]:
    """IPv6 addresses in one of the given textual layouts."""
    if len(layouts) == 0:
        raise ValueError("at least one layout is required")
    weights: dict[TextLayout, int] = {layout: 1 for layout in layouts}

    def generate(rng: random.Random) -> tuple[ipaddress.IPv6Address, str]:
        ip: Ipv6 = ipv6_layout(rng, weights)
        return ip.address, ip.text

    return from_generator(generate)


def domains(max_label_count: int = DEFAULT_CONFIG.max_label_count) -> st.SearchStrategy[str]:
    check_positive("max_label_count", max_label_count)
    return from_generator(lambda rng: domain(rng, max_label_count))


def hosts(max_label_count: int = DEFAULT_CONFIG.max_label_count) -> st.SearchStrategy[Host]:
    check_positive("max_label_count", max_label_count)
    return from_generator(lambda rng: host(rng, max_label_count))


def paths(
    absolute: bool = True, config: GeneratorConfig = DEFAULT_CONFIG
) -> st.SearchStrategy[tuple[Path, str]]:
    generate = path_absolute if absolute else path_rootless
    return from_generator(lambda rng: generate(rng, config))


def queries(
    min_queries: int = 0, max_queries: int = 20, config: GeneratorConfig = DEFAULT_CONFIG
) -> st.SearchStrategy[tuple[list[QueryParam], str]]:
    check_bounds("query count", min_queries, max_queries)
    return from_generator(lambda rng: query(rng, min_queries, max_queries, config))


def fragments(config: GeneratorConfig = DEFAULT_CONFIG) -> st.SearchStrategy[str]:
    return from_generator(lambda rng: fragment(rng, config))


def user_infos(config: GeneratorConfig = DEFAULT_CONFIG) -> st.SearchStrategy[tuple[UserInfo, str]]:
    return from_generator(lambda rng: user_info(rng, config))


def authorities(config: GeneratorConfig = DEFAULT_CONFIG) -> st.SearchStrategy[tuple[Authority, str]]:
    return from_generator(lambda rng: authority(rng, config))


def request_targets(
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> st.SearchStrategy[tuple[RequestTarget, str]]:
    return from_generator(lambda rng: request_target(rng, config))


def request_lines(config: GeneratorConfig = DEFAULT_CONFIG) -> st.SearchStrategy[tuple[RequestLine, str]]:
    return from_generator(lambda rng: request_line(rng, config))
