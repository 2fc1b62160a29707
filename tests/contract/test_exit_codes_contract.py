from __future__ import annotations

from pathlib import Path

import pytest

from gradebook.cli import EXIT_DIAGNOSTICS, EXIT_FATAL, EXIT_SUCCESS
from gradebook.cli import main as cli_main

"""Exit code contract: 0 success, 1 fatal, 2 diagnostics under --strict / usage error."""


def test_missing_path_is_usage_error(capsys):
    with pytest.raises(SystemExit) as e:
        cli_main([])
    assert e.value.code == 2
    assert "usage:" in capsys.readouterr().err


def test_exit_code_success(sample_xlsx: Path, capsys):
    code = cli_main([str(sample_xlsx)])
    assert code == EXIT_SUCCESS
    assert "Overall Records: 4" in capsys.readouterr().out


def test_exit_code_missing_file(temp_workdir: Path, capsys):
    code = cli_main([str(temp_workdir / "missing.xlsx")])
    out = capsys.readouterr().out
    assert code == EXIT_FATAL
    assert "ERROR input: file not found" in out
    assert "Overall Records" not in out


def test_exit_code_not_enough_rows(temp_workdir: Path, capsys):
    p = temp_workdir / "header.csv"
    p.write_text("S.No,Name\n", encoding="utf-8")
    code = cli_main([str(p)])
    out = capsys.readouterr().out
    assert code == EXIT_FATAL
    assert "ERROR input:" in out and "not enough rows" in out


def test_exit_code_config_error(sample_xlsx: Path, temp_workdir: Path, capsys):
    code = cli_main([str(sample_xlsx), "--config", str(temp_workdir / "config" / "none.yml")])
    out = capsys.readouterr().out
    assert code == EXIT_FATAL
    assert "ERROR config: config file not found" in out


def test_exit_code_strict_with_diagnostics(sample_xlsx: Path, capsys):
    assert cli_main([str(sample_xlsx), "--strict"]) == EXIT_DIAGNOSTICS


def test_exit_code_strict_clean_sheet(temp_workdir: Path, capsys):
    p = temp_workdir / "clean.csv"
    p.write_text(
        "S.No,Name,Section,Student ID,Quiz,Mid-Sem,Lab Test,Weekly Labs,Pre-Compre,Compre,Total (300)\n"
        "1,A,L1,2024A7PS0001P,10,20,15,8,9,30,83\n",
        encoding="utf-8",
    )
    assert cli_main([str(p), "--strict"]) == EXIT_SUCCESS


def test_unknown_component_is_usage_error(sample_xlsx: Path, capsys):
    with pytest.raises(SystemExit) as e:
        cli_main([str(sample_xlsx), "--component", "attendance"])
    assert e.value.code == 2


def test_negative_top_is_usage_error(sample_xlsx: Path, capsys):
    with pytest.raises(SystemExit) as e:
        cli_main([str(sample_xlsx), "--top", "-1"])
    assert e.value.code == 2
