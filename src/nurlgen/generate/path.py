"""nurlgen.generate.path
Rootless and absolute paths, paired with the dot-segment-free form a URL parser
is expected to reduce them to.
"""

import dataclasses
import random

from typing import Iterable, Self, Sequence

from .components import segment, segment_nz
from .config import DEFAULT_CONFIG, GeneratorConfig, check_positive


def _dot_segment_stack(segments: Sequence[str]) -> list[str]:
    """Collapses "." and ".." segments.
    A trailing "." leaves an empty segment behind, so "foo/." keeps its trailing slash.
    A ".." with nothing left to remove is dropped.
    """
    stack: list[str] = []
    for i, seg in enumerate(segments):
        if seg == ".":
            if 0 < i == len(segments) - 1:
                stack.append("")
        elif seg == "..":
            if i > 0 and len(stack) > 0:
                stack.pop()
        else:
            stack.append(seg)
    return stack


def normalize_segments(segments: Sequence[str]) -> str:
    """Normalized text of a rootless path given as its raw segments.
    e.g. normalize_segments(["foo", ".", "bar"]) == "foo/bar"
         normalize_segments(["foo", "."]) == "foo/"
         normalize_segments(["a", ".."]) == "/"
    """
    stack: list[str] = _dot_segment_stack(segments)
    if len(stack) == 0:
        return "/"
    return "/".join(stack)


def normalize_absolute_segments(segments: Sequence[str]) -> str:
    """Normalized text of an absolute path given as the raw segments after its leading "/".
    No segments at all is the bare "/".
    """
    return "/" + "/".join(_dot_segment_stack(segments))


def normalize(path: str) -> str:
    """Normalizes path text. Applying it to its own output changes nothing."""
    if path.startswith("/"):
        return normalize_absolute_segments(path[1:].split("/"))
    return normalize_segments(path.split("/"))


@dataclasses.dataclass(frozen=True)
class Path:
    """A path as generated (its segments) and as normalized."""

    segments: tuple[str, ...]
    absolute: bool
    normalized: str

    @classmethod
    def from_segments(cls, segments: Iterable[str], absolute: bool = False) -> Self:
        segs: tuple[str, ...] = tuple(segments)
        normalized: str = normalize_absolute_segments(segs) if absolute else normalize_segments(segs)
        return cls(segments=segs, absolute=absolute, normalized=normalized)

    @property
    def raw(self: Self) -> str:
        return ("/" if self.absolute else "") + "/".join(self.segments)


def path_segments(rng: random.Random, config: GeneratorConfig = DEFAULT_CONFIG) -> list[str]:
    """segment-nz *( "/" segment ), as a list of segments."""
    check_positive("max_segments", config.max_segments)
    first: str = segment_nz(rng, config.max_segment_chars)
    rest: list[str] = [
        segment(rng, 0, config.max_segment_chars) for _ in range(rng.randint(0, config.max_segments))
    ]
    return [first, *rest]


def path_rootless(rng: random.Random, config: GeneratorConfig = DEFAULT_CONFIG) -> tuple[Path, str]:
    """path-rootless = segment-nz *( "/" segment )"""
    path: Path = Path.from_segments(path_segments(rng, config))
    return path, path.raw


def path_absolute(rng: random.Random, config: GeneratorConfig = DEFAULT_CONFIG) -> tuple[Path, str]:
    """path-absolute = "/" [ segment-nz *( "/" segment ) ]
    The optional part is present half of the time; without it the path is just "/".
    """
    segments: list[str] = path_segments(rng, config) if rng.random() < 0.5 else []
    path: Path = Path.from_segments(segments, absolute=True)
    return path, path.raw
