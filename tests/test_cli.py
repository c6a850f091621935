"""CLI surface: help, version, usage errors and the compose command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from faceted import __version__
from faceted.cli import main, parse_variables
from faceted.errors import ConfigurationError

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("flag", ["--help", "-h"])
def test_help_exits_zero(flag: str, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([flag]) == 0
    assert "usage: facet" in capsys.readouterr().out


@pytest.mark.parametrize("flag", ["--version", "-v"])
def test_version_exits_zero(flag: str, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([flag]) == 0
    assert capsys.readouterr().out.strip() == __version__


def test_no_arguments_is_an_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "No arguments provided" in capsys.readouterr().err


def test_unknown_flag_is_an_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--unknown"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error:")
    assert "--unknown" in err


def test_compose_prints_sections(
    facet_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(
        [
            "compose",
            "--facets-dir",
            str(facet_root),
            "--persona",
            "coder",
            "--policy",
            "coding",
            "--instruction",
            "implement",
            "--var",
            "feature=search",
        ]
    )

    out = capsys.readouterr().out
    assert code == 0
    system, user = out.split("=== user ===\n")
    assert system == "=== system ===\nYou are a careful coder.\n"
    assert user.startswith("Follow clean code principles.")
    assert "Policy Source:" in user
    assert user.rstrip("\n").endswith("Implement feature search.")


def test_compose_json_output(
    facet_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(
        [
            "compose",
            "--base-dir",
            str(facet_root),
            "--knowledge",
            "./knowledge/architecture.md",
            "--instruction",
            "Summarize the design.",
            "--max-chars",
            "10",
            "--json",
        ]
    )

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["system_prompt"] == ""
    assert payload["user_message"].startswith("The system\n...TRUNCATED...")
    assert "Knowledge is truncated" in payload["user_message"]
    assert payload["user_message"].endswith("Summarize the design.")


def test_compose_warns_when_nothing_resolves(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    caplog: pytest.LogCaptureFixture,
) -> None:
    (tmp_path / "blank.md").write_text("", encoding="utf-8")
    with caplog.at_level("WARNING", logger="faceted.cli"):
        code = main(
            ["compose", "--base-dir", str(tmp_path), "--policy", "./blank.md"]
        )

    assert code == 0
    assert "no facets resolved" in caplog.text
    assert capsys.readouterr().out == "=== system ===\n\n=== user ===\n\n"


def test_compose_rejects_negative_budget(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["compose", "--instruction", "x", "--max-chars", "-1"]) == 1
    assert "context_max_chars" in capsys.readouterr().err


def test_compose_rejects_non_integer_budget(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["compose", "--max-chars", "many"]) == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_parse_variables() -> None:
    assert parse_variables(["a=1", "flag", "b="]) == {"a": "1", "flag": True, "b": ""}
    with pytest.raises(ConfigurationError):
        parse_variables(["=oops"])
