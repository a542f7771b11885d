from __future__ import annotations

from clipformat.app import main


def test_extract_prints_prefix_and_seed(tmp_path, capsys) -> None:
    code = main(["--config", str(tmp_path / "none.json"), "extract", "Total:", "10+5"])

    output = capsys.readouterr().out
    assert code == 0
    assert "prefix: 'Total: '" in output
    assert "seed:   '10+5'" in output


def test_eval_prints_formatted_text(tmp_path, capsys) -> None:
    code = main(["--config", str(tmp_path / "none.json"), "eval", "2+3*4"])

    assert code == 0
    assert capsys.readouterr().out == "14\n"


def test_dry_run_describes_side_effects(tmp_path, capsys) -> None:
    code = main(["--config", str(tmp_path / "none.json"), "seed", "--dry-run", "look", "up", "pytest"])

    assert code == 0
    assert capsys.readouterr().out == "Searching Kagi: https://kagi.com/search?q=pytest\n"


def test_unchanged_text_exits_non_zero(tmp_path, capsys) -> None:
    config = tmp_path / "config.json"
    config.write_text('{"navigation": {"enabled": false}}', encoding="utf-8")

    code = main(["--config", str(config), "eval", "plain words"])

    assert code == 1
    assert capsys.readouterr().out == "plain words\n"


def test_config_errors_exit_with_two(tmp_path, capsys) -> None:
    config = tmp_path / "config.json"
    config.write_text('{"processing": {"throttle_ms": "fast"}}', encoding="utf-8")

    assert main(["--config", str(config), "eval", "1+1"]) == 2
    assert "config error" in capsys.readouterr().err
