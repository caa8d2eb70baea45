"""nurlgen.generate command line
Prints generated request-line pieces, one per line, for feeding to parsers outside Python.
"""

import argparse
import dataclasses
import enum
import json
import logging
import random
import sys

from typing import Any, Callable, Sequence

from . import __version__
from .components import QueryParam, fragment, query
from .config import ConfigError, GeneratorConfig
from .host import Host, host
from .ip import Ipv6, ipv6_layout
from .path import path_absolute
from .request_line import request_line
from .target import request_target

_LOGGER: logging.Logger = logging.getLogger("nurlgen.generate")


def _host(rng: random.Random, config: GeneratorConfig) -> tuple[Host, str]:
    h: Host = host(rng, config.max_label_count)
    return h, h.text


def _ipv6(rng: random.Random, config: GeneratorConfig) -> tuple[dict[str, str], str]:
    ip: Ipv6 = ipv6_layout(rng)
    return {"address": ip.address.exploded, "layout": ip.layout.value}, ip.text


def _query(rng: random.Random, config: GeneratorConfig) -> tuple[list[QueryParam], str]:
    return query(rng, *config.query_count_range, config=config)


def _fragment(rng: random.Random, config: GeneratorConfig) -> tuple[str, str]:
    text: str = fragment(rng, config)
    return text, text


_KINDS: dict[str, Callable[[random.Random, GeneratorConfig], tuple[Any, str]]] = {
    "request-line": request_line,
    "target": request_target,
    "host": _host,
    "ipv6": _ipv6,
    "path": path_absolute,
    "query": _query,
    "fragment": _fragment,
}


def _to_json(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {"type": type(value).__name__} | {
            field.name: _to_json(getattr(value, field.name)) for field in dataclasses.fields(value)
        }
    if isinstance(value, dict):
        return {k: _to_json(v) for k, v in value.items()}
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_to_json(v) for v in value]
    if value is None or isinstance(value, (str, int, bool)):
        return value
    return str(value)


def _parser() -> argparse.ArgumentParser:
    defaults: GeneratorConfig = GeneratorConfig()
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="nurlgen",
        description="Generate HTTP request lines and URL components paired with what they contain.",
    )
    parser.add_argument("--kind", choices=sorted(_KINDS), default="request-line")
    parser.add_argument("-n", "--count", type=int, default=10, help="number of items (default: 10)")
    parser.add_argument("--seed", type=int, default=None, help="random seed for reproducibility")
    parser.add_argument("--json", action="store_true", help="print each item as a JSON object with its value")
    parser.add_argument("--max-label-count", type=int, default=defaults.max_label_count)
    parser.add_argument("--max-segments", type=int, default=defaults.max_segments)
    parser.add_argument("--min-queries", type=int, default=defaults.query_count_range[0])
    parser.add_argument("--max-queries", type=int, default=defaults.query_count_range[1])
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser: argparse.ArgumentParser = _parser()
    args: argparse.Namespace = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, stream=sys.stderr)

    if args.count < 0:
        parser.error("--count must not be negative")
    try:
        config: GeneratorConfig = GeneratorConfig(
            max_label_count=args.max_label_count,
            max_segments=args.max_segments,
            query_count_range=(args.min_queries, args.max_queries),
        )
    except ConfigError as e:
        parser.error(str(e))

    seed: int
    if args.seed is None:
        seed = random.randrange(2**32)
        _LOGGER.warning("no --seed given, using seed %d", seed)
    else:
        seed = args.seed
        _LOGGER.info("seed %d", seed)
    rng: random.Random = random.Random(seed)
    generate: Callable[[random.Random, GeneratorConfig], tuple[Any, str]] = _KINDS[args.kind]
    for _ in range(args.count):
        value, text = generate(rng, config)
        if args.json:
            print(json.dumps({"text": text, "value": _to_json(value)}, ensure_ascii=False))
        else:
            print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
