# scramble/core/puzzles.py
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from .cipher import scramble_text
from .errors import PuzzleFormatError, ShapeMismatchError
from .models import Plain, Puzzle, PuzzleFile, Scrambled
from .pcg import PCG128

DigestFn = Callable[[bytes], str]

_COMMON_KEYS = ("date", "author")
_PLAIN_KEYS = ("solution",)
_SCRAMBLED_KEYS = ("text", "hash")


def _field_problems(record: Dict[str, Any], keys) -> List[str]:
    """Lists what keeps record from carrying string values for every key."""
    problems = []
    for key in keys:
        if key not in record:
            problems.append(f"missing field '{key}'")
        elif not isinstance(record[key], str):
            problems.append(f"field '{key}' must be a string, got {type(record[key]).__name__}")
    return problems


def _required_str(record: Dict[str, Any], key: str, index: Optional[int]) -> str:
    problems = _field_problems(record, (key,))
    if problems:
        raise PuzzleFormatError(problems[0], index=index)
    return record[key]


def decode_puzzle(record: Any, index: Optional[int] = None) -> Puzzle:
    """
    Reads one puzzle record.

    The detail shape is picked from the fields present: a string ``solution``
    makes a plain entry, string ``text`` and ``hash`` make a scrambled one.
    Plain wins when both are present. A record matching neither raises
    ShapeMismatchError listing the problems for both readings.
    """
    if not isinstance(record, dict):
        raise PuzzleFormatError(f"expected an object, got {type(record).__name__}", index=index)

    date = _required_str(record, "date", index)
    author = _required_str(record, "author", index)
    comment = record.get("comment")
    if comment is not None and not isinstance(comment, str):
        raise PuzzleFormatError("field 'comment' must be a string", index=index)

    # a null comment is not consumed, so it is written back as-is
    common = _COMMON_KEYS + ("comment",) if comment is not None else _COMMON_KEYS

    plain_problems = _field_problems(record, _PLAIN_KEYS)
    scrambled_problems = _field_problems(record, _SCRAMBLED_KEYS)
    if not plain_problems:
        detail = Plain(solution=record["solution"])
        consumed = common + _PLAIN_KEYS
    elif not scrambled_problems:
        detail = Scrambled(text=record["text"], hash=record["hash"])
        consumed = common + _SCRAMBLED_KEYS
    else:
        raise ShapeMismatchError(plain_problems, scrambled_problems, index=index)

    extra = {k: v for k, v in record.items() if k not in consumed}
    return Puzzle(date=date, author=author, detail=detail, comment=comment, extra=extra)


def encode_puzzle(puzzle: Puzzle) -> Dict[str, Any]:
    record: Dict[str, Any] = dict(puzzle.extra)
    record["date"] = puzzle.date
    record["author"] = puzzle.author
    if puzzle.comment is not None:
        record["comment"] = puzzle.comment
    if isinstance(puzzle.detail, Plain):
        record["solution"] = puzzle.detail.solution
    else:
        record["text"] = puzzle.detail.text
        record["hash"] = puzzle.detail.hash
    return record


def decode_puzzle_file(data: Any) -> PuzzleFile:
    if not isinstance(data, dict):
        raise PuzzleFormatError(f"expected a top-level object, got {type(data).__name__}")
    records = data.get("puzzles")
    if not isinstance(records, list):
        raise PuzzleFormatError("top-level field 'puzzles' must be a list")
    puzzles = [decode_puzzle(record, index=i) for i, record in enumerate(records)]
    extra = {k: v for k, v in data.items() if k != "puzzles"}
    logger.debug(f"Decoded {len(puzzles)} puzzles")
    return PuzzleFile(puzzles=puzzles, extra=extra)


def encode_puzzle_file(puzzle_file: PuzzleFile) -> Dict[str, Any]:
    data: Dict[str, Any] = dict(puzzle_file.extra)
    data["puzzles"] = [encode_puzzle(p) for p in puzzle_file.puzzles]
    return data


# --- Scrambling ---

def scramble_puzzle(puzzle: Puzzle, rng: PCG128, digest: DigestFn) -> Puzzle:
    """Turns a plain entry into a scrambled one. Scrambled entries come back untouched and draw nothing."""
    if isinstance(puzzle.detail, Scrambled):
        return puzzle
    solution = puzzle.detail.solution
    detail = Scrambled(
        text=scramble_text(solution, rng),
        hash=digest(solution.encode("utf-8")),
    )
    return Puzzle(
        date=puzzle.date,
        author=puzzle.author,
        detail=detail,
        comment=puzzle.comment,
        extra=dict(puzzle.extra),
    )


def scramble_puzzles(puzzle_file: PuzzleFile, rng: PCG128, digest: DigestFn) -> PuzzleFile:
    """Scrambles every plain entry in order, threading one generator through the whole file."""
    puzzles = []
    scrambled_count = 0
    for puzzle in puzzle_file.puzzles:
        result = scramble_puzzle(puzzle, rng, digest)
        if result is not puzzle:
            scrambled_count += 1
        puzzles.append(result)
    logger.info(
        f"Scrambled {scrambled_count} of {len(puzzles)} puzzles "
        f"({len(puzzles) - scrambled_count} already scrambled, {rng.draws} draws used)"
    )
    return PuzzleFile(puzzles=puzzles, extra=dict(puzzle_file.extra))
