from __future__ import annotations

import json
from pathlib import Path

import pytest

from dais.cli import main


def test_init_then_assemble_prints_json_summary(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["init", str(tmp_path)]) == 0
    assert (tmp_path / ".daisconfig").is_file()
    capsys.readouterr()

    assert main(["assemble", str(tmp_path), "--json-summary", "--log-level", "WARNING"]) == 0

    summary = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert summary["dependency_packs"] == ["@bancor/contracts-solidity", "@studydefi/money-legos"]
    assert summary["protocols"]["BANCOR"] == {"abi_fragments": 1, "addresses": {"MAINNET": 1}}
    assert summary["protocols"]["DYDX"] == {"abi_fragments": 1, "addresses": {"MAINNET": 1}}
    assert (tmp_path / "lib" / "abis.ts").is_file()
    assert (tmp_path / "lib" / "addresses.ts").is_file()


def test_assemble_without_config_exits_nonzero(tmp_path: Path) -> None:
    assert main(["assemble", str(tmp_path), "--log-level", "ERROR"]) == 1
    assert not (tmp_path / "lib").exists()


def test_assemble_with_table_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["init", str(tmp_path)])

    code = main(["assemble", str(tmp_path), "--no-banner", "--events-limit", "3", "--log-level", "WARNING"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Assembled Protocols" in out
    assert "@studydefi/money-legos" in out
    assert "Recent Internal Events" in out


@pytest.mark.parametrize("value", ["0", "-1", "two"])
def test_assemble_rejects_non_positive_concurrency(tmp_path: Path, value: str) -> None:
    main(["init", str(tmp_path)])

    with pytest.raises(SystemExit) as excinfo:
        main(["assemble", str(tmp_path), "--max-concurrency", value])

    assert excinfo.value.code == 2
    assert not (tmp_path / "lib").exists()


def test_assemble_reports_unsupported_protocols(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    payload = {
        "solversion": "0.6.12",
        "contractImports": [
            {"protocol": "BANCOR", "name": "ContractRegistry"},
            {"protocol": "made_up[/x]", "name": "Nothing"},
        ],
    }
    (tmp_path / ".daisconfig").write_text(json.dumps(payload), encoding="utf-8")

    assert main(["assemble", str(tmp_path), "--json-summary", "--max-concurrency", "1", "--log-level", "ERROR"]) == 0

    summary = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert summary["unsupported_protocols"] == ["made_up[/x]"]
    assert summary["dependency_packs"] == ["@bancor/contracts-solidity"]
    assert "ERROR" not in (tmp_path / "lib" / "addresses.ts").read_text(encoding="utf-8")


def test_table_output_lists_skipped_protocols(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    payload = {"contractImports": [{"protocol": "[bold]weird", "name": "X"}]}
    (tmp_path / ".daisconfig").write_text(json.dumps(payload), encoding="utf-8")

    assert main(["assemble", str(tmp_path), "--no-banner", "--events-limit", "5", "--log-level", "ERROR"]) == 0

    out = capsys.readouterr().out
    assert "Skipped unsupported protocols" in out
    assert "[bold]weird" in out
    assert "Recent Internal Events" in out
