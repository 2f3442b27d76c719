"""Error types with formatted pattern context."""

from __future__ import annotations


class PatternSyntaxError(Exception):
    """Raised on the first syntax error, with the offset where parsing stopped."""

    def __init__(self, message: str, offset: int, pattern: str) -> None:
        self.message = message
        self.offset = offset
        self.pattern = pattern
        super().__init__(self.format())

    def format(self) -> str:
        # Offsets past the end point at the end-of-input position
        col = min(self.offset, len(self.pattern))
        return (
            f"error: {self.message} at offset {self.offset}\n"
            f"  | {self.pattern}\n"
            f"  | {' ' * col}^"
        )
