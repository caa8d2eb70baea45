import random

import pytest
from hypothesis import given, settings, strategies as st

import abnf
from nurlgen.generate import (
    ConfigError,
    GeneratorConfig,
    Path,
    normalize,
    normalize_absolute_segments,
    normalize_segments,
    path_absolute,
    path_rootless,
)

randoms = st.randoms(use_true_random=False)

# Short segments with plenty of dots, so "." and ".." show up often.
dotty_segments = st.lists(st.sampled_from(["a", "b", "", ".", "..", "%2e", "..."]), min_size=1, max_size=12)


@pytest.mark.parametrize(
    "segments, normalized",
    [
        (["a", ".."], "/"),
        (["foo", ".", "bar"], "foo/bar"),
        (["foo", "."], "foo/"),
        (["foo", "bar", ".."], "foo"),
        (["..", "foo"], "foo"),
        ([".", "foo"], "foo"),
        (["."], "/"),
        (["a", "..", "..", "b"], "b"),
        (["a", "", "b"], "a//b"),
        (["a", "%2e%2e"], "a/%2e%2e"),
    ],
)
def test_normalize_segments(segments: list[str], normalized: str) -> None:
    assert normalize_segments(segments) == normalized


@pytest.mark.parametrize(
    "raw, normalized",
    [
        ("/a/..", "/"),
        ("/foo/./bar", "/foo/bar"),
        ("/foo/../bar", "/bar"),
        ("/foo/.", "/foo/"),
        ("/", "/"),
    ],
)
def test_normalize_absolute(raw: str, normalized: str) -> None:
    assert normalize(raw) == normalized


@given(segments=dotty_segments)
def test_normalization_is_idempotent(segments: list[str]) -> None:
    once = normalize_segments(segments)
    assert normalize(once) == once
    absolute = normalize("/" + "/".join(segments))
    assert normalize(absolute) == absolute


@given(segments=dotty_segments)
def test_normalized_path_has_no_dot_segments(segments: list[str]) -> None:
    for text in (normalize_segments(segments), normalize("/" + "/".join(segments))):
        assert "." not in text.split("/")
        assert ".." not in text.split("/")


@settings(max_examples=300, deadline=None)
@given(rng=randoms)
def test_path_rootless(rng: random.Random) -> None:
    path, text = path_rootless(rng, GeneratorConfig(max_segments=10))
    assert abnf.matches(abnf.PATH_ROOTLESS, text)
    assert not path.absolute
    assert path.raw == text
    assert len(path.segments) <= 11
    assert path.normalized == normalize(text)
    assert normalize(path.normalized) == path.normalized


@settings(max_examples=300, deadline=None)
@given(rng=randoms)
def test_path_absolute(rng: random.Random) -> None:
    path, text = path_absolute(rng, GeneratorConfig(max_segments=10))
    assert abnf.matches(abnf.PATH_ABSOLUTE, text)
    assert text.startswith("/")
    assert not text.startswith("//")
    assert path.absolute
    assert path.normalized.startswith("/")
    assert path.normalized == normalize(text)
    assert normalize(path.normalized) == path.normalized


def test_path_absolute_is_sometimes_bare() -> None:
    rng = random.Random(0)
    texts = {path_absolute(rng, GeneratorConfig(max_segments=2))[1] for _ in range(200)}
    assert "/" in texts
    assert any(len(t) > 1 for t in texts)


def test_bare_absolute_path() -> None:
    path = Path.from_segments((), absolute=True)
    assert path.raw == "/"
    assert path.normalized == "/"
    assert normalize_absolute_segments(()) == "/"
    assert normalize(path.raw) == "/"


def test_path_from_segments() -> None:
    path = Path.from_segments(["a", "b", ".."], absolute=True)
    assert path.raw == "/a/b/.."
    assert path.normalized == "/a"


def test_zero_max_segments_is_a_config_error() -> None:
    with pytest.raises(ConfigError):
        GeneratorConfig(max_segments=0)
    with pytest.raises(ConfigError):
        GeneratorConfig(max_segment_chars=0)
