# tests/test_cli.py
import copy
import hashlib
import json

import pytest
from typer.testing import CliRunner

from scramble import __version__
from scramble.cli import app
from scramble.config.paths import get_user_config_file
from scramble.core.digests import get_digest
from scramble.core.pcg import DEFAULT_SEED, PCG128
from scramble.core.puzzles import decode_puzzle_file, encode_puzzle_file, scramble_puzzles
from scramble.core.wide_int import UInt128

runner = CliRunner()

SCRAMBLED = {
    "date": "2021-06-02",
    "author": "Rob",
    "text": "Tac",
    "hash": hashlib.sha256(b"Cat").hexdigest(),
}
DOC = {
    "puzzles": [
        {"date": "2021-06-01", "author": "Delia", "solution": "cat"},
        SCRAMBLED,
        {"date": "2021-06-04", "author": "Delia", "comment": "Café", "solution": "Many hands make light work."},
    ]
}

@pytest.fixture(autouse=True)
def quiet_logging(mocker):
    return mocker.patch("scramble.cli.setup_logging")

@pytest.fixture
def puzzle_path(tmp_path):
    path = tmp_path / "puzzles.json"
    path.write_text(json.dumps(DOC), encoding="utf-8")
    return path

def _expected(seed=DEFAULT_SEED, skip=0, digest="sha256"):
    rng = PCG128(seed)
    if skip:
        rng.advance(skip)
    puzzle_file = decode_puzzle_file(copy.deepcopy(DOC))
    return encode_puzzle_file(scramble_puzzles(puzzle_file, rng, get_digest(digest)))

def _run_to_file(tmp_path, puzzle_path, *options):
    out = tmp_path / "out.json"
    result = runner.invoke(app, ["run", str(puzzle_path), "--output", str(out), *options])
    assert result.exit_code == 0, result.output
    return json.loads(out.read_text(encoding="utf-8"))


def test_run_writes_scrambled_file(tmp_path, puzzle_path):
    data = _run_to_file(tmp_path, puzzle_path)
    assert data["puzzles"][0] == {
        "date": "2021-06-01",
        "author": "Delia",
        "text": "tac",
        "hash": hashlib.sha256(b"cat").hexdigest(),
    }
    assert data["puzzles"][1] == SCRAMBLED
    assert data == _expected()

def test_run_is_idempotent_on_its_own_output(tmp_path, puzzle_path):
    first = tmp_path / "first.json"
    second = tmp_path / "second.json"
    assert runner.invoke(app, ["run", str(puzzle_path), "-o", str(first)]).exit_code == 0
    assert runner.invoke(app, ["run", str(first), "-o", str(second), "--seed", "7"]).exit_code == 0
    assert second.read_bytes() == first.read_bytes()

def test_run_reads_stdin_and_writes_stdout():
    result = runner.invoke(app, ["run"], input=json.dumps(DOC))
    assert result.exit_code == 0
    assert json.loads(result.stdout) == _expected()

def test_run_output_format(tmp_path, puzzle_path):
    out = tmp_path / "out.json"
    runner.invoke(app, ["run", str(puzzle_path), "-o", str(out)])
    text = out.read_text(encoding="utf-8")
    assert text.endswith("}\n")
    assert '\n  "puzzles": [' in text
    assert '"comment": "Café"' in text
    first = text.index('"author"')
    assert first < text.index('"date"') < text.index('"hash"') < text.index('"text"')

def test_seed_option(tmp_path, puzzle_path):
    data = _run_to_file(tmp_path, puzzle_path, "--seed", "0x1:0x2")
    assert data == _expected(seed=UInt128(high=1, low=2))

def test_seed_from_config(tmp_path, puzzle_path):
    get_user_config_file().write_text(json.dumps({"seed": {"high": 5, "low": 6}}), encoding="utf-8")
    data = _run_to_file(tmp_path, puzzle_path)
    assert data == _expected(seed=UInt128(high=5, low=6))

def test_skip_option_jumps_ahead(tmp_path, puzzle_path):
    data = _run_to_file(tmp_path, puzzle_path, "--skip", "1000")
    assert data == _expected(skip=1000)

def test_digest_option(tmp_path, puzzle_path):
    data = _run_to_file(tmp_path, puzzle_path, "--digest", "blake2s")
    assert data["puzzles"][0]["hash"] == hashlib.blake2s(b"cat").hexdigest()

@pytest.mark.parametrize("options", [
    ["--seed", "banana"],
    ["--digest", "md5"],
    ["--skip", "-1"],
])
def test_bad_options_are_usage_errors(puzzle_path, options):
    result = runner.invoke(app, ["run", str(puzzle_path), *options])
    assert result.exit_code == 2

def test_missing_input_file(tmp_path):
    result = runner.invoke(app, ["run", str(tmp_path / "nope.json")])
    assert result.exit_code == 2

def test_invalid_json_exits_1(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{", encoding="utf-8")
    assert runner.invoke(app, ["run", str(path)]).exit_code == 1

def test_shape_mismatch_exits_1(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"puzzles": [{"date": "2020-01-01", "author": "X"}]}), encoding="utf-8")
    out = tmp_path / "out.json"
    result = runner.invoke(app, ["run", str(path), "-o", str(out)])
    assert result.exit_code == 1
    assert not out.exists()

def test_check_reports_counts_and_warnings(puzzle_path):
    result = runner.invoke(app, ["check", str(puzzle_path)])
    assert result.exit_code == 0
    assert "3 puzzles: 2 plain, 1 scrambled" in result.stdout
    assert "warning: missing date 2021-06-03" in result.stdout

def test_check_rejects_bad_records(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"puzzles": [{"date": "2020-01-01"}]}), encoding="utf-8")
    assert runner.invoke(app, ["check", str(path)]).exit_code == 1

def test_callback_sets_up_logging(puzzle_path, quiet_logging):
    result = runner.invoke(app, ["--verbose", "check", str(puzzle_path)])
    assert result.exit_code == 0
    quiet_logging.assert_called_once_with(level="DEBUG", verbose=True, log_to_file=False)

def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout
