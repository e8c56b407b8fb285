"""Unit coverage for the command line entry point."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from intlcatalog.backend import cli

SOURCE_ROOT = Path(__file__).resolve().parents[2] / "src" / "intlcatalog"


def test_compile_subcommand_matches_formatjs_options(tmp_path: Path) -> None:
    destination = tmp_path / "en.json"

    exit_code = cli.main(
        ["compile", str(SOURCE_ROOT / "lang" / "en.json"), "--ast", "--out-file", str(destination)]
    )

    assert exit_code == 0
    assert destination.read_bytes() == (SOURCE_ROOT / "compiled_lang" / "en.json").read_bytes()


def test_compile_subcommand_reports_errors_on_stderr(tmp_path: Path, capsys) -> None:
    source = tmp_path / "en.json"
    source.write_text(json.dumps({"x": {"defaultMessage": "{oops"}}), encoding="utf-8")

    exit_code = cli.main(["compile", str(source), "--ast", "--out-file", str(tmp_path / "out.json")])

    assert exit_code == 1
    assert "unclosed argument brace" in capsys.readouterr().err


def test_compile_messages_task_runs_the_configured_batch(
    monkeypatch: pytest.MonkeyPatch,
    subprocess_pythonpath: None,
    workspace: Path,
) -> None:
    shutil.copy(SOURCE_ROOT / "lang" / "fr.json", workspace / "lang" / "fr.json")
    settings_file = workspace / "settings.yaml"
    settings_file.write_text(
        "compiler:\n"
        "  source_dir: lang\n"
        "  destination_dir: compiled_lang\n"
        "  command: ['{python}', -m, intlcatalog, compile, '{source}', --ast, --out-file, '{destination}']\n"
        "locales:\n"
        "  default_locale: fr\n"
        "  loaders: {fr: compiled_lang/fr.json}\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("INTLCATALOG_SETTINGS", str(settings_file))

    assert cli.main(["compile-messages"]) == 0
    assert (workspace / "compiled_lang" / "fr.json").read_bytes() == (
        SOURCE_ROOT / "compiled_lang" / "fr.json"
    ).read_bytes()


def test_compile_messages_fails_when_source_directory_is_missing(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    settings_file = tmp_path / "settings.yaml"
    settings_file.write_text(
        "compiler:\n"
        "  source_dir: missing\n"
        "  destination_dir: compiled_lang\n"
        "  command: tool {source} {destination}\n"
        "locales:\n"
        "  default_locale: en\n"
        "  loaders: {en: compiled_lang/en.json}\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("INTLCATALOG_SETTINGS", str(settings_file))

    assert cli.main(["compile-messages"]) == 1
    assert not (tmp_path / "compiled_lang").exists()


def test_compile_messages_takes_no_arguments() -> None:
    with pytest.raises(SystemExit):
        cli.main(["compile-messages", "--watch"])
