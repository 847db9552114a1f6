# scramble/core/errors.py
from typing import List, Optional


class PuzzleFormatError(ValueError):
    """A puzzle file or record does not have the expected structure."""

    def __init__(self, message: str, index: Optional[int] = None):
        self.index = index
        if index is not None:
            message = f"puzzle #{index}: {message}"
        super().__init__(message)


class ShapeMismatchError(PuzzleFormatError):
    """A record is neither a plain entry nor a scrambled one; keeps why each reading failed."""

    def __init__(self, plain_problems: List[str], scrambled_problems: List[str], index: Optional[int] = None):
        self.plain_problems = list(plain_problems)
        self.scrambled_problems = list(scrambled_problems)
        message = (
            "record matches neither shape "
            f"(as plain: {'; '.join(self.plain_problems)}) "
            f"(as scrambled: {'; '.join(self.scrambled_problems)})"
        )
        super().__init__(message, index=index)
