# scramble/core/models.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

@dataclass(frozen=True)
class Plain:
    """An entry still holding its solution in the clear."""
    solution: str

@dataclass(frozen=True)
class Scrambled:
    """An entry already turned into a cryptogram."""
    text: str
    hash: str # Hex digest of the UTF-8 solution

Detail = Union[Plain, Scrambled]

@dataclass
class Puzzle:
    """One dated puzzle record."""
    date: str # YYYY-MM-DD
    author: str
    detail: Detail
    comment: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict) # Unknown keys, written back as-is

    @property
    def is_scrambled(self) -> bool:
        return isinstance(self.detail, Scrambled)

@dataclass
class PuzzleFile:
    """Top-level document: {"puzzles": [...]}."""
    puzzles: List[Puzzle] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)
