import io

import pytest
from loguru import logger

from repairer.src.main import main


@pytest.fixture(autouse=True)
def reset_logger():
    # main() binds a sink to the captured stderr of the current test
    yield
    logger.remove()


@pytest.fixture
def stdin(monkeypatch):
    def _set(text: str):
        monkeypatch.setattr("sys.stdin", io.StringIO(text))

    return _set


def test_cli_repairs_file(tmp_path, capsys):
    path = tmp_path / "completion.txt"
    path.write_text('Here:\n```json\n{a: 1,}\n```', encoding="utf-8")
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == '{"a": 1}\n'


def test_cli_reads_stdin(stdin, capsys):
    stdin("[1, 2, 3,]")
    assert main([]) == 0
    assert capsys.readouterr().out == "[1, 2, 3]\n"


def test_cli_pretty(stdin, capsys):
    stdin('{"a": 1}')
    assert main(["--pretty"]) == 0
    assert capsys.readouterr().out == '{\n  "a": 1\n}\n'


def test_cli_reports_missing_json(stdin, capsys):
    stdin("I cannot help with that.")
    assert main([]) == 1
    assert "No JSON object or array found" in capsys.readouterr().err


def test_cli_enforces_size_cap(stdin, capsys):
    stdin('{"a": "long enough"}')
    assert main(["--max-chars", "5"]) == 2
    assert "limit is 5" in capsys.readouterr().err


def test_cli_unreadable_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt")]) == 2
    assert "Cannot read input" in capsys.readouterr().err


def test_cli_min_length_flag(stdin, capsys):
    stdin("[1, 2")
    assert main(["--min-length", "1"]) == 0
    assert capsys.readouterr().out == "[1, 2]\n"
