from __future__ import annotations

from typing import Optional


class BvhParseError(RuntimeError):
    pass


class BvhSyntaxError(BvhParseError):
    """Input text does not conform to the BVH grammar."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        context: Optional[str] = None,
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        self.context = context
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} (line {self.line}, column {self.column})"


class BvhConsistencyError(BvhParseError):
    """The token forest did not have the shape the grammar guarantees."""


class BvhFrameDataError(BvhParseError):
    """MOTION data length disagrees with Frames x total channels."""
