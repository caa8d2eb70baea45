import random

from urllib.parse import unquote_to_bytes

import pytest
from hypothesis import given, settings, strategies as st

import abnf
from nurlgen.generate import (
    FRAGMENT_CHARS,
    PCHAR_CHARS,
    QUERY_CHARS,
    SUB_DELIMS,
    UNRESERVED,
    USERINFO_CHARS,
    ConfigError,
    GeneratorConfig,
    any_scheme,
    fragment,
    http_scheme,
    query,
    query_param,
    query_subcomponent,
    segment,
    segment_nz,
    user_info,
    userinfo_subcomponent,
)

randoms = st.randoms(use_true_random=False)


def test_safe_sets() -> None:
    assert set(USERINFO_CHARS.safe) == set(UNRESERVED + SUB_DELIMS)
    assert set(PCHAR_CHARS.safe) == set(UNRESERVED + SUB_DELIMS + ":@")
    assert set(FRAGMENT_CHARS.safe) == set(UNRESERVED + SUB_DELIMS + ":@/?")
    assert set(QUERY_CHARS.safe) == set(UNRESERVED + "!$'()*,;" + ":@/? ")
    for c in "+&=":
        assert not QUERY_CHARS.is_safe(c)


@settings(max_examples=300, deadline=None)
@given(rng=randoms)
def test_segments_are_pchars(rng: random.Random) -> None:
    assert abnf.matches(abnf.SEGMENT, segment(rng, 0, 50))
    nz = segment_nz(rng, 50)
    assert len(nz) > 0
    assert abnf.matches(abnf.SEGMENT_NZ, nz)


@settings(max_examples=300, deadline=None)
@given(rng=randoms)
def test_query_subcomponent_never_has_literal_delimiters(rng: random.Random) -> None:
    text = query_subcomponent(rng, 0, 80)
    assert abnf.matches(abnf.QUERY, text)
    assert " " not in text
    assert "%20" not in text
    assert "&" not in text
    assert "=" not in text


def test_query_space_becomes_plus() -> None:
    rng = random.Random(99)
    texts = [query_subcomponent(rng, 50, 50) for _ in range(40)]
    assert any("+" in t for t in texts)
    assert not any(" " in t for t in texts)


@settings(max_examples=300, deadline=None)
@given(rng=randoms)
def test_query_param(rng: random.Random) -> None:
    param, text = query_param(rng)
    key, eq, value = text.partition("=")
    assert eq == "="
    assert param.key == key
    assert param.value == (value if value else None)
    assert param.serialize() == text


@settings(max_examples=200, deadline=None)
@given(rng=randoms, bounds=st.tuples(st.integers(0, 5), st.integers(0, 5)).map(sorted))
def test_query(rng: random.Random, bounds: list[int]) -> None:
    lo, hi = bounds
    params, text = query(rng, lo, hi)
    assert lo <= len(params) <= hi
    assert abnf.matches(abnf.QUERY, text)
    assert text == "&".join(p.serialize() for p in params)
    if len(params) > 0:
        assert [p.key for p in params] == [pair.partition("=")[0] for pair in text.split("&")]


def test_query_rejects_inverted_bounds() -> None:
    with pytest.raises(ConfigError):
        query(random.Random(0), 3, 1)


@settings(max_examples=300, deadline=None)
@given(rng=randoms)
def test_user_info(rng: random.Random) -> None:
    info, text = user_info(rng)
    assert abnf.matches(abnf.USERINFO, text)
    if info.password is None:
        assert text == info.username
        assert ":" not in text
    else:
        assert text == f"{info.username}:{info.password}"
    assert abnf.matches(abnf.USERINFO, userinfo_subcomponent(rng, 0, 10))


@settings(max_examples=300, deadline=None)
@given(rng=randoms)
def test_fragment(rng: random.Random) -> None:
    text = fragment(rng, GeneratorConfig(max_fragment_chars=60))
    assert abnf.matches(abnf.FRAGMENT, text)
    assert "#" not in text


@settings(max_examples=200, deadline=None)
@given(rng=randoms)
def test_percent_escapes_decode_to_unsafe_chars(rng: random.Random) -> None:
    text = segment(rng, 100, 100)
    i = 0
    while i < len(text):
        if text[i] != "%":
            assert PCHAR_CHARS.is_safe(text[i])
            i += 1
            continue
        # one scalar is 1 to 4 escapes long; the lead byte says how many
        lead = int(text[i + 1 : i + 3], 16)
        size = 1 if lead < 0x80 else 2 if lead < 0xE0 else 3 if lead < 0xF0 else 4
        decoded = unquote_to_bytes(text[i : i + 3 * size]).decode("utf-8")
        assert len(decoded) == 1
        assert not PCHAR_CHARS.is_safe(decoded)
        i += 3 * size


@settings(max_examples=200, deadline=None)
@given(rng=randoms)
def test_schemes(rng: random.Random) -> None:
    assert http_scheme(rng).lower() in ("http", "https")
    scheme = any_scheme(rng)
    assert abnf.matches(abnf.SCHEME, scheme)
    assert 1 <= len(scheme) <= 16
