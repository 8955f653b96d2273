"""Exception hierarchy for the clippings pipeline.

Every parse-time error is fatal to the whole run: the caller receives a
complete list of clippings or one of these errors naming the block (and,
for description failures, every layout) that could not be handled.
"""
from __future__ import annotations


class ClippingsError(Exception):
    """Root of all clippings errors."""


class ClippingsIOError(ClippingsError):
    """Raised when an input file cannot be opened, read or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"could not read {path}: {reason}")
        self.path = path
        self.reason = reason


class ClippingParseError(ClippingsError):
    """Base for failures tied to one block of the export file."""

    def __init__(self, message: str, *, block_index: int = -1) -> None:
        where = f"block {block_index}: " if block_index >= 0 else ""
        super().__init__(f"{where}{message}")
        self.block_index = block_index


class MalformedSegmentError(ClippingParseError):
    """Block has an unexpected number of lines and matches no exception."""

    def __init__(self, content: str, *, block_index: int = -1) -> None:
        super().__init__(
            f"incorrect clipping section found of length {len(content)}: {content!r}",
            block_index=block_index,
        )
        self.length = len(content)
        self.content = content


class DescriptionUnrecognizedError(ClippingParseError):
    """No description layout matched; ``mismatches`` has one entry per layout."""

    def __init__(
        self,
        line: str,
        mismatches: tuple[str, ...],
        *,
        block_index: int = -1,
    ) -> None:
        joined = "; ".join(mismatches)
        super().__init__(
            f"description malformed with all layouts: {joined}",
            block_index=block_index,
        )
        self.line = line
        self.mismatches = mismatches


class FieldParseError(ClippingParseError):
    """A matched layout captured a value that could not be converted."""

    def __init__(
        self,
        field: str,
        raw_value: str,
        *,
        layout: str,
        line: str,
        block_index: int = -1,
    ) -> None:
        super().__init__(
            f"{field} could not be parsed from {raw_value!r} "
            f"(layout {layout}) in line {line!r}",
            block_index=block_index,
        )
        self.field = field
        self.raw_value = raw_value
        self.layout = layout
        self.line = line


class ClippingSelectionError(ClippingsError):
    """Random selection found no clipping of the wanted type."""
