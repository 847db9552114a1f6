# scramble/cli.py

import json
import sys
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger

from .services.logging import setup_logging
from .config.loader import get_config
from .core.dates import DateWarning, date_warnings
from .core.digests import get_digest
from .core.errors import PuzzleFormatError
from .core.models import PuzzleFile
from .core.pcg import PCG128, parse_seed
from .core.puzzles import decode_puzzle_file, encode_puzzle_file, scramble_puzzles
from .core.wide_int import UInt128
from . import __version__

# --- Typer App ---
app = typer.Typer(help="scramble - turn puzzle solutions into letter-substitution cryptograms.")

def version_callback(value: bool):
    if value:
        print(f"scramble version: {__version__}")
        raise typer.Exit()

@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True, help="Show version and exit."),
):
    """ Main callback to set up logging """
    config = get_config()
    log_level = "DEBUG" if verbose else "INFO"
    setup_logging(level=log_level, verbose=verbose, log_to_file=config.log_to_file)
    logger.debug(f"Log level set to: {log_level}")


def _read_puzzle_file(path: Optional[Path]) -> PuzzleFile:
    """Reads and decodes the puzzle document from path (or stdin). Exits with code 1 on bad input."""
    source = str(path) if path else "<stdin>"
    try:
        raw = path.read_text(encoding="utf-8") if path else sys.stdin.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read {source}: {e}")
        raise typer.Exit(code=1)

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"{source} is not valid JSON: {e}")
        raise typer.Exit(code=1)

    try:
        puzzle_file = decode_puzzle_file(data)
    except PuzzleFormatError as e:
        logger.error(f"{source}: {e}")
        raise typer.Exit(code=1)

    logger.info(f"Read {len(puzzle_file.puzzles)} puzzles from {source}")
    return puzzle_file


def _log_date_warnings(puzzle_file: PuzzleFile) -> List[DateWarning]:
    warnings = date_warnings(p.date for p in puzzle_file.puzzles)
    for warning in warnings:
        logger.warning(f"Puzzle dates: {warning}")
    return warnings


def _resolve_seed(seed: Optional[str]) -> UInt128:
    if seed is None:
        config_seed = get_config().seed
        return UInt128(high=config_seed.high, low=config_seed.low)
    try:
        return parse_seed(seed)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--seed")


@app.command()
def run(
    path: Optional[Path] = typer.Argument(None, help="Puzzle JSON file. Reads stdin when omitted.", exists=True, file_okay=True, dir_okay=False, readable=True, resolve_path=True),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the scrambled JSON here instead of stdout.", dir_okay=False, writable=True, resolve_path=True),
    seed: Optional[str] = typer.Option(None, "--seed", "-s", help="Generator seed: HIGH:LOW words or one 128-bit integer (decimal or 0x hex). Defaults to the configured seed."),
    skip: int = typer.Option(0, "--skip", min=0, help="Advance the generator by this many draws before scrambling."),
    digest: Optional[str] = typer.Option(None, "--digest", "-d", help="Digest used for the solution hash (default from config)."),
):
    """
    Scrambles every plain puzzle and writes the whole file back out.
    Already scrambled puzzles are copied unchanged.
    """
    config = get_config()
    seed_value = _resolve_seed(seed)
    digest_name = digest or config.digest
    try:
        digest_fn = get_digest(digest_name)
    except KeyError as e:
        raise typer.BadParameter(e.args[0], param_hint="--digest")

    puzzle_file = _read_puzzle_file(path)
    if config.warn_dates:
        _log_date_warnings(puzzle_file)

    rng = PCG128(seed=seed_value)
    if skip:
        logger.info(f"Skipping {skip} draws before scrambling")
        rng.advance(skip)

    result = scramble_puzzles(puzzle_file, rng, digest_fn)
    text = json.dumps(
        encode_puzzle_file(result),
        indent=config.indent,
        sort_keys=config.sort_keys,
        ensure_ascii=False,
    ) + "\n"

    if output is None:
        typer.echo(text, nl=False)
        return
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        logger.error(f"Error writing output file {output}: {e}")
        raise typer.Exit(code=1)
    logger.success(f"Scrambled puzzles written to: {output}")


@app.command()
def check(
    path: Optional[Path] = typer.Argument(None, help="Puzzle JSON file. Reads stdin when omitted.", exists=True, file_okay=True, dir_okay=False, readable=True, resolve_path=True),
):
    """
    Validates a puzzle file without scrambling it and reports date problems.
    """
    puzzle_file = _read_puzzle_file(path)
    scrambled = sum(1 for p in puzzle_file.puzzles if p.is_scrambled)
    plain = len(puzzle_file.puzzles) - scrambled
    typer.echo(f"{len(puzzle_file.puzzles)} puzzles: {plain} plain, {scrambled} scrambled")
    for warning in _log_date_warnings(puzzle_file):
        typer.echo(f"warning: {warning}")


if __name__ == "__main__":
    app()
