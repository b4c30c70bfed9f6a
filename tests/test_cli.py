import io
import json
from pathlib import Path

import pytest

from kv_flat import __version__
from kv_flat.__main__ import main


def _write_json(path: Path, value: object) -> str:
    _ = path.write_text(json.dumps(value), encoding="utf-8")
    return str(path)


def test_cli_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_cli_flatten_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _write_json(tmp_path / "nested.json", {"a": {"b": 1, "c": [1, 2]}})

    main(["flatten", source])

    assert json.loads(capsys.readouterr().out) == {"a.b": 1, "a.c.0": 1, "a.c.1": 2}


def test_cli_flatten_options(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _write_json(tmp_path / "nested.json", {"a": {"b": {"c": [1]}}})

    main(["flatten", "--delimiter", "/", "--max-depth", "2", source])
    assert json.loads(capsys.readouterr().out) == {"a/b": {"c": [1]}}

    main(["flatten", "--safe", source])
    assert json.loads(capsys.readouterr().out) == {"a.b.c": [1]}


def test_cli_unflatten_from_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO('{"a": 1, "a.b": 2}'))
    main(["unflatten"])
    assert json.loads(capsys.readouterr().out) == {"a": 1}

    monkeypatch.setattr("sys.stdin", io.StringIO('{"a": 1, "a.b": 2}'))
    main(["unflatten", "--overwrite", "-"])
    assert json.loads(capsys.readouterr().out) == {"a": {"b": 2}}

    monkeypatch.setattr("sys.stdin", io.StringIO('{"a.0": 1}'))
    main(["unflatten", "--object-mode"])
    assert json.loads(capsys.readouterr().out) == {"a": {"0": 1}}


def test_cli_diff(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    old = _write_json(tmp_path / "old.json", {"server": {"port": 80, "debug": True}})
    new = _write_json(tmp_path / "new.json", {"server": {"port": 8080, "workers": 4}})

    main(["diff", old, new])

    assert json.loads(capsys.readouterr().out) == {
        "added": {"server.workers": 4},
        "removed": {"server.debug": True},
        "changed": {"server.port": 8080},
    }


def test_cli_rejects_invalid_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "broken.json"
    _ = source.write_text("{not json", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["flatten", str(source)])

    assert excinfo.value.code == 2
    assert "invalid JSON" in capsys.readouterr().err


def test_cli_rejects_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["flatten", str(tmp_path / "missing.json")])

    assert excinfo.value.code == 2
    assert "cannot read" in capsys.readouterr().err


def test_cli_rejects_invalid_options(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _write_json(tmp_path / "nested.json", {"a": 1})

    with pytest.raises(SystemExit) as excinfo:
        main(["flatten", "--max-depth", "0", source])

    assert excinfo.value.code == 2
    assert "max_depth must be a positive integer" in capsys.readouterr().err


def test_cli_rejects_non_utf8_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "latin1.json"
    _ = source.write_bytes(b'{"a": "\xff"}')

    with pytest.raises(SystemExit) as excinfo:
        main(["flatten", str(source)])

    assert excinfo.value.code == 2
    assert "invalid JSON" in capsys.readouterr().err


def test_cli_diff_max_depth(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    old = _write_json(tmp_path / "old.json", {"server": {"tls": {"cert": "a"}}})
    new = _write_json(tmp_path / "new.json", {"server": {"tls": {"cert": "b"}}})

    main(["diff", "--max-depth", "2", old, new])

    assert json.loads(capsys.readouterr().out) == {
        "added": {},
        "removed": {},
        "changed": {"server.tls": {"cert": "b"}},
    }
