import ipaddress
import json
import logging

import pytest

import abnf
from nurlgen.generate.__main__ import main


def _run(capsys: pytest.CaptureFixture[str], *argv: str) -> list[str]:
    assert main(list(argv)) == 0
    return capsys.readouterr().out.splitlines()


def test_same_seed_same_output(capsys: pytest.CaptureFixture[str]) -> None:
    first = _run(capsys, "--seed", "7", "-n", "20")
    second = _run(capsys, "--seed", "7", "-n", "20")
    assert len(first) == 20
    assert first == second
    assert all(abnf.matches(abnf.REQUEST_LINE, line) for line in first)


def test_unseeded_run_reports_its_seed(capsys: pytest.CaptureFixture[str], caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="nurlgen.generate"):
        unseeded = _run(capsys, "-n", "5")
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING and "seed" in r.getMessage()]
    assert len(warnings) == 1
    seed = warnings[0].getMessage().rsplit(" ", 1)[1]
    assert _run(capsys, "--seed", seed, "-n", "5") == unseeded


def test_zero_count(capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(capsys, "--seed", "1", "-n", "0") == []


@pytest.mark.parametrize(
    "kind, rule",
    [
        ("request-line", abnf.REQUEST_LINE),
        ("target", abnf.REQUEST_TARGET),
        ("host", abnf.HOST),
        ("ipv6", abnf.IPV6ADDRESS),
        ("path", abnf.PATH_ABSOLUTE),
        ("query", abnf.QUERY),
        ("fragment", abnf.FRAGMENT),
    ],
)
def test_kinds(capsys: pytest.CaptureFixture[str], kind: str, rule: str) -> None:
    lines = _run(capsys, "--kind", kind, "--seed", "3", "-n", "15", "--max-segments", "4", "--max-queries", "3")
    assert len(lines) == 15
    assert all(abnf.matches(rule, line) for line in lines)


def test_json_output(capsys: pytest.CaptureFixture[str]) -> None:
    lines = _run(capsys, "--kind", "ipv6", "--seed", "4", "-n", "10", "--json")
    for line in lines:
        item = json.loads(line)
        assert ipaddress.IPv6Address(item["text"]) == ipaddress.IPv6Address(item["value"]["address"])
        assert item["value"]["layout"] in {"uncompressed", "compressed-start", "compressed-middle", "compressed-end", "mapped-v4"}


def test_json_request_line(capsys: pytest.CaptureFixture[str]) -> None:
    lines = _run(capsys, "--seed", "5", "-n", "5", "--json", "--max-label-count", "2")
    for line in lines:
        item = json.loads(line)
        assert item["value"]["type"] == "RequestLine"
        assert item["text"].startswith(item["value"]["verb"] + " ")
        assert item["text"].endswith(" " + item["value"]["version"])


@pytest.mark.parametrize(
    "argv",
    [
        ["--max-label-count", "0"],
        ["--max-segments", "0"],
        ["--min-queries", "5", "--max-queries", "2"],
        ["-n", "-1"],
        ["--kind", "nope"],
    ],
)
def test_bad_arguments_exit_with_usage_error(capsys: pytest.CaptureFixture[str], argv: list[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
    assert "usage:" in capsys.readouterr().err
