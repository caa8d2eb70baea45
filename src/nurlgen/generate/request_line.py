"""nurlgen.generate.request_line
request-line = method SP request-target SP HTTP-version
"""

import dataclasses
import enum
import random

from .chars import MAX_SCALAR, CodePointRange
from .config import DEFAULT_CONFIG, GeneratorConfig
from .target import RequestTarget, request_target

VERBS: tuple[str, ...] = ("GET", "HEAD", "POST", "PUT", "DELETE", "CONNECT", "OPTIONS", "TRACE", "PATCH")


def request_verb(rng: random.Random) -> str:
    return rng.choice(VERBS)


def request_verb_wrong_case(rng: random.Random) -> str:
    """A valid verb with at least one letter lowercased. Methods are case-sensitive."""
    verb: str = request_verb(rng)
    lowered: list[int] = [i for i in range(len(verb)) if rng.random() < 0.5]
    if len(lowered) == 0:
        lowered.append(rng.randrange(len(verb)))
    return "".join(c.lower() if i in lowered else c for i, c in enumerate(verb))


_ALL_SCALARS: CodePointRange = CodePointRange(0, MAX_SCALAR)


def _random_scalar(rng: random.Random) -> str:
    return chr(_ALL_SCALARS.nth(rng.randrange(len(_ALL_SCALARS))))


def request_verb_wrong(rng: random.Random, max_chars: int = 16) -> str:
    """Any text that is not one of VERBS."""
    text: str = "".join(_random_scalar(rng) for _ in range(rng.randint(0, max_chars)))
    if text in VERBS:
        text += "_"
    return text


class HttpVersion(enum.Enum):
    HTTP_1_0 = "HTTP/1.0"
    HTTP_1_1 = "HTTP/1.1"
    HTTP_2 = "HTTP/2"
    HTTP_3 = "HTTP/3"


def version(rng: random.Random) -> tuple[HttpVersion, str]:
    v: HttpVersion = rng.choice(list(HttpVersion))
    return v, v.value


@dataclasses.dataclass(frozen=True)
class RequestLine:
    verb: str
    target: RequestTarget
    version: HttpVersion


def request_line(rng: random.Random, config: GeneratorConfig = DEFAULT_CONFIG) -> tuple[RequestLine, str]:
    verb: str = request_verb(rng)
    target, target_text = request_target(rng, config)
    v, version_text = version(rng)
    return RequestLine(verb=verb, target=target, version=v), f"{verb} {target_text} {version_text}"
