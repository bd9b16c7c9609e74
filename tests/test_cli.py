from __future__ import annotations

import json

import pytest

from request_target.cli.main import main
from request_target.config import ScanConfig


def test_classify_prints_kinds(capsys) -> None:
    main(["classify", "/a", "*", "example.com:80", "https://x/y"])
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "abs_path\t/a",
        "server_options\t*",
        "authority\texample.com:80",
        "abs_uri\thttps://x/y",
    ]


def test_classify_exits_2_on_invalid(capsys) -> None:
    with pytest.raises(SystemExit) as ei:
        main(["classify", "/a", " *"])
    assert ei.value.code == 2
    out = capsys.readouterr().out
    assert "abs_path\t/a" in out
    assert "[FAIL] invalid target ' *': surrounding whitespace" in out


def test_scan_writes_report(tmp_path, capsys) -> None:
    corpus = tmp_path / "lines.txt"
    corpus.write_text("GET /a HTTP/1.1\nCONNECT host:443 HTTP/1.1\nGET a/b HTTP/1.1\n", encoding="utf-8")
    out = tmp_path / "report" / "scan.json"

    main(["scan", "--corpus", str(corpus), "--input-mode", "request_line", "--out", str(out)])

    assert "[OK] wrote:" in capsys.readouterr().out
    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["total"] == 3
    assert report["counts"]["abs_path"] == 1
    assert report["counts"]["authority"] == 1
    assert report["counts"]["invalid"] == 1
    assert report["config"]["input_mode"] == "request_line"


def test_scan_fail_on_invalid(tmp_path, capsys) -> None:
    corpus = tmp_path / "targets.txt"
    corpus.write_text("/ok\nuser@example.com/\n", encoding="utf-8")
    with pytest.raises(SystemExit) as ei:
        main(["scan", "--corpus", str(corpus), "--fail-on-invalid"])
    assert ei.value.code == 2
    captured = capsys.readouterr()
    assert json.loads(captured.out)["counts"]["invalid"] == 1
    assert "[FAIL] 1 of 2 targets are invalid" in captured.err


def test_scan_config_file_overrides_flags(tmp_path, capsys) -> None:
    corpus = tmp_path / "targets.jsonl"
    corpus.write_text('{"url": "/a"}\n{"url": "*"}\n', encoding="utf-8")
    cfg_path = tmp_path / "scan.json"
    cfg_path.write_text(ScanConfig(fmt="jsonl", text_key="url").to_json(), encoding="utf-8")

    main(["scan", "--corpus", str(corpus), "--config", str(cfg_path)])

    report = json.loads(capsys.readouterr().out)
    assert report["counts"]["abs_path"] == 1
    assert report["counts"]["server_options"] == 1


def test_scan_rejects_zero_max_samples(tmp_path, capsys) -> None:
    corpus = tmp_path / "targets.txt"
    corpus.write_text("/a\n", encoding="utf-8")
    with pytest.raises(SystemExit) as ei:
        main(["scan", "--corpus", str(corpus), "--max-samples", "0"])
    assert ei.value.code == 2
    assert "--max-samples" in capsys.readouterr().err
