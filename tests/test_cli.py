import pyperclip
import pytest

from dummydata import cli
from dummydata.settings import Settings

from conftest import StubClient


@pytest.fixture
def stub(monkeypatch):
    s = StubClient(["id,name\n", "1,Ann\n"])
    monkeypatch.setattr(cli, "build_model_client", lambda cfg: s)
    return s


def test_generate_streams_to_stdout(stub, capsys):
    assert cli.main(["generate", "2 people", "--format", "csv"]) == 0
    out = capsys.readouterr().out
    assert out == "id,name\n1,Ann\n"
    messages, _ = stub.calls[0]
    assert "in CSV format" in messages[1].content


def test_generate_writes_file_and_copies(stub, tmp_path, monkeypatch):
    copied = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)
    rc = cli.main(["generate", "2 people", "-f", "CSV", "--decimals", "2", "-o", str(tmp_path), "--copy"])
    assert rc == 0
    assert (tmp_path / "dummy-data.csv").read_text(encoding="utf-8") == "id,name\n1,Ann\n"
    assert copied == ["id,name\n1,Ann\n"]


def test_example_prompt(stub):
    assert cli.main(["generate", "--example", "Sensor Data"]) == 0
    assert "20 sensor readings" in stub.calls[0][0][1].content


def test_empty_prompt_exit_2(stub, capsys):
    assert cli.main(["generate", "  "]) == 2
    assert "Please enter a description" in capsys.readouterr().err
    assert stub.calls == []


def test_upstream_failure_exit_1(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(cli, "build_model_client", lambda cfg: StubClient(["a"], fail_after=1))
    assert cli.main(["generate", "x", "-o", str(tmp_path)]) == 1
    assert "Failed to generate data" in capsys.readouterr().err
    assert list(tmp_path.iterdir()) == []


def test_invalid_choice_exits():
    with pytest.raises(SystemExit):
        cli.main(["generate", "x", "--decimals", "7"])


def test_examples_command(capsys):
    assert cli.main(["examples"]) == 0
    assert "User Profiles" in capsys.readouterr().out


def test_unknown_provider_exit_2(monkeypatch, capsys):
    monkeypatch.setattr(cli, "settings", Settings(LLM_PROVIDER="bard", _env_file=None))
    assert cli.main(["generate", "x"]) == 2
    assert "Unknown LLM_PROVIDER" in capsys.readouterr().err
