"""nurlgen.generate.components
Generators for the percent-encodable URI components of RFC 3986:
userinfo, path segments, query and fragment, plus the scheme.
"""

import dataclasses
import random
import string

from typing import Self

from .chars import CharacterClass, GeneratedChar, Normal, render
from .config import DEFAULT_CONFIG, GeneratorConfig, check_bounds

# Each of these ABNF rules is from RFC 3986.

# ALPHA = %x41-5A / %x61-7A
ALPHA: str = string.ascii_letters

# DIGIT = %x30-39
DIGIT: str = string.digits

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
UNRESERVED: str = ALPHA + DIGIT + "-._~"

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
SUB_DELIMS: str = "!$&'()*+,;="

# userinfo = *( unreserved / pct-encoded / sub-delims / ":" )
# (":" separates the username from the password, so it is not part of either)
USERINFO_CHARS: CharacterClass = CharacterClass("userinfo", UNRESERVED + SUB_DELIMS)

# pchar = unreserved / pct-encoded / sub-delims / ":" / "@"
PCHAR_CHARS: CharacterClass = CharacterClass("pchar", UNRESERVED + SUB_DELIMS + ":@")

# query = *( pchar / "/" / "?" )
# "&" and "=" delimit the key=value pairs and "+" stands for a space, so none of them is
# literal here. The space is safe, but it is always emitted as "+".
QUERY_CHARS: CharacterClass = CharacterClass(
    "query",
    UNRESERVED + "".join(c for c in SUB_DELIMS if c not in "+&=") + ":@/? ",
)

# fragment = *( pchar / "/" / "?" )
FRAGMENT_CHARS: CharacterClass = CharacterClass("fragment", UNRESERVED + SUB_DELIMS + ":@/?")

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME_TAIL: str = ALPHA + DIGIT + "+-."


def userinfo_subcomponent(rng: random.Random, min_chars: int, max_chars: int) -> str:
    return render(USERINFO_CHARS.generate_string(rng, min_chars, max_chars))


def segment(rng: random.Random, min_chars: int, max_chars: int) -> str:
    """segment = *pchar"""
    return render(PCHAR_CHARS.generate_string(rng, min_chars, max_chars))


def segment_nz(rng: random.Random, max_chars: int) -> str:
    """segment-nz = 1*pchar"""
    return segment(rng, 1, max_chars)


def _space_to_plus(c: GeneratedChar) -> GeneratedChar:
    if isinstance(c, Normal) and c.char == " ":
        return Normal("+")
    return c


def query_subcomponent(rng: random.Random, min_chars: int, max_chars: int) -> str:
    return render(map(_space_to_plus, QUERY_CHARS.generate_string(rng, min_chars, max_chars)))


def fragment(rng: random.Random, config: GeneratorConfig = DEFAULT_CONFIG) -> str:
    return render(FRAGMENT_CHARS.generate_string(rng, 0, config.max_fragment_chars))


@dataclasses.dataclass(frozen=True)
class UserInfo:
    """The conventional <username>[:<password>] form of userinfo. The password may be empty."""

    username: str
    password: str | None


def user_info(rng: random.Random, config: GeneratorConfig = DEFAULT_CONFIG) -> tuple[UserInfo, str]:
    username: str = userinfo_subcomponent(rng, 0, config.max_userinfo_chars)
    password: str | None = None
    if rng.random() < 0.5:
        password = userinfo_subcomponent(rng, 0, config.max_userinfo_chars)
    text: str = username if password is None else f"{username}:{password}"
    return UserInfo(username=username, password=password), text


@dataclasses.dataclass(frozen=True)
class QueryParam:
    key: str
    value: str | None

    def serialize(self: Self) -> str:
        return f"{self.key}={self.value if self.value is not None else ''}"


def query_param(rng: random.Random, config: GeneratorConfig = DEFAULT_CONFIG) -> tuple[QueryParam, str]:
    key: str = query_subcomponent(rng, 0, config.max_query_chars)
    value: str = query_subcomponent(rng, 0, config.max_query_chars)
    return QueryParam(key=key, value=value if len(value) > 0 else None), f"{key}={value}"


def query(
    rng: random.Random, min_queries: int, max_queries: int, config: GeneratorConfig = DEFAULT_CONFIG
) -> tuple[list[QueryParam], str]:
    """Between min_queries and max_queries params, joined by "&"."""
    check_bounds("query count", min_queries, max_queries)
    pairs: list[tuple[QueryParam, str]] = [
        query_param(rng, config) for _ in range(rng.randint(min_queries, max_queries))
    ]
    return [param for param, _ in pairs], "&".join(text for _, text in pairs)


def http_scheme(rng: random.Random) -> str:
    """Either http or https, each letter in a random case. Schemes are case-insensitive."""
    scheme: str = "https" if rng.random() < 0.5 else "http"
    return "".join(c.upper() if rng.random() < 0.5 else c for c in scheme)


def any_scheme(rng: random.Random, max_chars: int = 16) -> str:
    check_bounds("scheme length", 1, max_chars)
    return rng.choice(ALPHA) + "".join(rng.choice(_SCHEME_TAIL) for _ in range(rng.randint(0, max_chars - 1)))
