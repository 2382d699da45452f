"""CLI behaviour tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from optsgen.cli import _build_parser, main

@pytest.fixture(autouse=True)
def _reset_optsgen_logger():
    yield
    logger = logging.getLogger("optsgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


SOURCE = """\
package bindings

type Opts struct {
    Name *string
}
"""


def test_cli_requires_type_name() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args([])


def test_cli_parses_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        ["ListOptions", "--source", "containers.go", "--no-format", "--dry-run", "-v"]
    )
    assert args.type_name == "ListOptions"
    assert args.source == "containers.go"
    assert args.no_format is True
    assert args.dry_run is True
    assert args.verbose is True
    assert args.output_dir is None


def test_cli_dry_run_prints_generated_source(tmp_path: Path, monkeypatch, capsys) -> None:
    source = tmp_path / "types.go"
    source.write_text(SOURCE, encoding="utf-8")
    monkeypatch.setenv("GOFILE", str(source))
    monkeypatch.setenv("GOPACKAGE", "bindings")

    main(["Opts", "--dry-run"])

    out = capsys.readouterr().out
    assert out.startswith("// Code generated by go generate; DO NOT EDIT.")
    assert "func (o *Opts) WithName(value string) *Opts {" in out
    assert not (tmp_path / "types_opts.go").exists()


def test_cli_writes_file_without_formatting(tmp_path: Path, monkeypatch) -> None:
    source = tmp_path / "types.go"
    source.write_text(SOURCE, encoding="utf-8")
    monkeypatch.setenv("GOFILE", str(source))
    monkeypatch.setenv("GOPACKAGE", "bindings")

    main(["Opts", "--no-format"])

    assert "GetName() string" in (tmp_path / "types_opts.go").read_text(encoding="utf-8")


def test_cli_exits_non_zero_on_missing_type(tmp_path: Path, monkeypatch, capsys) -> None:
    source = tmp_path / "types.go"
    source.write_text(SOURCE, encoding="utf-8")
    monkeypatch.setenv("GOFILE", str(source))
    monkeypatch.setenv("GOPACKAGE", "bindings")

    with pytest.raises(SystemExit) as excinfo:
        main(["Missing", "--no-format"])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err == f"optsgen: {source}: error: type Missing is not declared in the source file\n"
    assert not (tmp_path / "types_missing.go").exists()


def test_cli_exits_non_zero_without_gofile(monkeypatch, capsys) -> None:
    monkeypatch.delenv("GOFILE", raising=False)

    with pytest.raises(SystemExit) as excinfo:
        main(["Opts"])

    assert excinfo.value.code == 1
    assert "GOFILE" in capsys.readouterr().err


def test_cli_log_file_records_debug_trace(tmp_path: Path, monkeypatch, capsys) -> None:
    source = tmp_path / "types.go"
    source.write_text(SOURCE, encoding="utf-8")
    log_file = tmp_path / "optsgen.log"
    monkeypatch.setenv("GOPACKAGE", "bindings")

    main(["Opts", "--source", str(source), "--dry-run", "--log-file", str(log_file)])

    trace = log_file.read_text(encoding="utf-8")
    assert "DEBUG optsgen.orchestrator: State -> done" in trace
    assert capsys.readouterr().err == ""
