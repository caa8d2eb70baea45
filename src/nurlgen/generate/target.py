"""nurlgen.generate.target
The four request-target forms of RFC 9112 section 3.2, and the URL authority.
"""

import dataclasses
import random

from .chars import weighted_choice
from .components import QueryParam, UserInfo, fragment, http_scheme, query, user_info
from .config import DEFAULT_CONFIG, GeneratorConfig
from .host import Host, host
from .path import Path, path_absolute


def _port(rng: random.Random) -> int:
    return rng.randrange(0x10000)


@dataclasses.dataclass(frozen=True)
class Authority:
    user_info: UserInfo | None
    host: Host
    port: int | None


def authority(rng: random.Random, config: GeneratorConfig = DEFAULT_CONFIG) -> tuple[Authority, str]:
    """authority = [ userinfo "@" ] host [ ":" port ]"""
    info: UserInfo | None = None
    text: str = ""
    if rng.random() < 0.5:
        info, info_text = user_info(rng, config)
        text += f"{info_text}@"
    h: Host = host(rng, config.max_label_count)
    text += h.text
    port: int | None = None
    if rng.random() < 0.5:
        port = _port(rng)
        text += f":{port}"
    return Authority(user_info=info, host=h, port=port), text


@dataclasses.dataclass(frozen=True)
class OriginForm:
    path: Path
    query: list[QueryParam] | None


def origin_form(rng: random.Random, config: GeneratorConfig = DEFAULT_CONFIG) -> tuple[OriginForm, str]:
    """origin-form = absolute-path [ "?" query ]"""
    path, text = path_absolute(rng, config)
    params, query_text = query(rng, *config.query_count_range, config=config)
    if len(params) == 0:
        return OriginForm(path=path, query=None), text
    return OriginForm(path=path, query=params), f"{text}?{query_text}"


@dataclasses.dataclass(frozen=True)
class AbsoluteForm:
    scheme: str
    authority: Authority
    path: Path | None
    query: list[QueryParam] | None
    fragment: str | None


def absolute_form(rng: random.Random, config: GeneratorConfig = DEFAULT_CONFIG) -> tuple[AbsoluteForm, str]:
    """absolute-form = absolute-URI, here always an http(s) URL with an authority"""
    scheme: str = http_scheme(rng)
    auth, auth_text = authority(rng, config)
    text: str = f"{scheme}://{auth_text}"

    path: Path | None = None
    if rng.random() < 0.5:
        path, path_text = path_absolute(rng, config)
        text += path_text

    params: list[QueryParam] | None = None
    if rng.random() < 0.5:
        params, query_text = query(rng, *config.query_count_range, config=config)
        text += f"?{query_text}"

    frag: str | None = None
    if rng.random() < 0.5:
        frag = fragment(rng, config)
        text += f"#{frag}"

    return AbsoluteForm(scheme=scheme, authority=auth, path=path, query=params, fragment=frag), text


@dataclasses.dataclass(frozen=True)
class AuthorityForm:
    host: Host
    port: int


def authority_form(rng: random.Random, config: GeneratorConfig = DEFAULT_CONFIG) -> tuple[AuthorityForm, str]:
    """authority-form = uri-host ":" port"""
    h: Host = host(rng, config.max_label_count)
    port: int = _port(rng)
    return AuthorityForm(host=h, port=port), f"{h.text}:{port}"


@dataclasses.dataclass(frozen=True)
class AsteriskForm:
    pass


def asterisk_form() -> tuple[AsteriskForm, str]:
    """asterisk-form = "*" """
    return AsteriskForm(), "*"


RequestTarget = OriginForm | AbsoluteForm | AuthorityForm | AsteriskForm


def request_target(
    rng: random.Random, config: GeneratorConfig = DEFAULT_CONFIG
) -> tuple[RequestTarget, str]:
    return weighted_choice(
        rng,
        (
            (1, lambda r: origin_form(r, config)),
            (1, lambda r: absolute_form(r, config)),
            (1, lambda r: authority_form(r, config)),
            (1, lambda r: asterisk_form()),
        ),
    )
