import pytest
from click.testing import CliRunner

from cachesim.config import ConfigError, checkConfig
from cachesim.csim import main, printSummary, run

TRACE = """\
I 0400d7d4,8
 L 10,1
 M 20,1
 L 22,1
 S 18,1
 L 110,1
 L 210,1
 M 12,1
"""


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "yi.trace").write_text(TRACE)
    return tmp_path


def test_print_summary(workdir, capsys):
    printSummary(3, 2, 1)
    assert capsys.readouterr().out == "hits:3 misses:2 evictions:1\n"
    assert (workdir / ".cachesim_results").read_text() == "3 2 1\n"


def test_run(workdir):
    state = run(4, 1, 4, "yi.trace")
    assert state.counts() == (4, 5, 3)
    assert (workdir / ".cachesim_results").read_text() == "4 5 3\n"


def test_cli(workdir):
    result = CliRunner().invoke(main, ["-s", "4", "-E", "1", "-b", "4", "-t", "yi.trace"])
    assert result.exit_code == 0
    assert result.output == "hits:4 misses:5 evictions:3\n"
    assert (workdir / ".cachesim_results").read_text() == "4 5 3\n"


def test_cli_verbose(workdir):
    result = CliRunner().invoke(main, ["-s", "4", "-E", "1", "-b", "4", "-t", "yi.trace", "-v"])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "simulation starting and reading from yi.trace",
        "L 10,1 miss",
        "M 20,1 miss hit",
        "L 22,1 hit",
        "S 18,1 hit",
        "L 110,1 miss eviction",
        "L 210,1 miss eviction",
        "M 12,1 miss eviction hit",
        "hits:4 misses:5 evictions:3",
    ]


def test_cli_missing_argument(workdir):
    result = CliRunner().invoke(main, ["-s", "4", "-b", "4", "-t", "yi.trace"])
    assert result.exit_code == 2
    assert "Missing required command line argument: -E" in result.output
    assert not (workdir / ".cachesim_results").exists()


def test_cli_help():
    result = CliRunner().invoke(main, ["-h"])
    assert result.exit_code == 0
    assert "Number of set index bits." in result.output
    assert "csim -s 4 -E 1 -b 4 -t traces/t1.trace" in result.output


@pytest.mark.parametrize("s,E,b", [(0, 1, 1), (1, 0, 1), (1, 1, 0), (-2, 1, 1), (40, 1, 30)])
def test_check_config_rejects(workdir, s, E, b):
    with pytest.raises(ConfigError):
        checkConfig(s, E, b, "yi.trace")


def test_check_config_missing_trace(workdir):
    with pytest.raises(ConfigError):
        checkConfig(1, 1, 1, "nope.trace")
    with pytest.raises(ConfigError):
        checkConfig(1, 1, 1, None)


def test_check_config_accepts(workdir):
    checkConfig(4, 1, 4, "yi.trace")


def test_cli_skips_undecodable_line(workdir):
    (workdir / "bad.trace").write_bytes(b" L 10,1\n\xff\xfe garbage\n L 10,1\n")
    result = CliRunner().invoke(main, ["-s", "1", "-E", "1", "-b", "1", "-t", "bad.trace"])
    assert result.exit_code == 0
    assert result.output == "hits:1 misses:1 evictions:0\n"
    assert (workdir / ".cachesim_results").read_text() == "1 1 0\n"


def test_cli_verbose_echoes_trace_text(workdir):
    (workdir / "pad.trace").write_text(" M 0421c7f0,4\n L 0x421C7F0,4\n")
    result = CliRunner().invoke(main, ["-s", "1", "-E", "1", "-b", "1", "-t", "pad.trace", "-v"])
    assert result.exit_code == 0
    assert result.output.splitlines()[1:] == [
        "M 0421c7f0,4 miss hit",
        "L 0x421C7F0,4 hit",
        "hits:2 misses:1 evictions:0",
    ]
