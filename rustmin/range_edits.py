"""
Range-based text editing for source rewrites.
Edits are collected against the original text and applied in one pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class TextRange:
    """Represents a range in text by character positions."""
    start_char: int
    end_char: int

    def __post_init__(self):
        if self.start_char > self.end_char:
            raise ValueError(f"Invalid range: start_char ({self.start_char}) > end_char ({self.end_char})")

    @property
    def length(self) -> int:
        return self.end_char - self.start_char

    def overlaps(self, other: TextRange) -> bool:
        """Check if this range overlaps with another."""
        return not (self.end_char <= other.start_char or other.end_char <= self.start_char)


@dataclass
class Edit:
    """Represents a single text edit operation using character positions."""
    range: TextRange
    replacement: str
    type: Optional[str]  # Type for counter in statistics


class RangeEditor:
    """
    Unicode-safe range-based text editor that works with character positions.
    """

    def __init__(self, original_text: str):
        self.original_text = original_text
        self.edits: List[Edit] = []

    def add_edit(self, start_char: int, end_char: int, replacement: str, edit_type: Optional[str]) -> None:
        """Add an edit operation using character positions."""
        char_range = TextRange(start_char, end_char)

        # Wider edits always win; on equal width the first one wins
        edits_to_remove = []
        for i, existing in enumerate(self.edits):
            if char_range.overlaps(existing.range):
                if char_range.length > existing.range.length:
                    edits_to_remove.append(i)
                else:
                    return

        for i in reversed(edits_to_remove):
            del self.edits[i]

        self.edits.append(Edit(char_range, replacement, edit_type))

    def add_deletion(self, start_char: int, end_char: int, edit_type: Optional[str]) -> None:
        """Add a deletion operation (empty replacement)."""
        self.add_edit(start_char, end_char, "", edit_type)

    def add_replacement(self, start_char: int, end_char: int, replacement: str, edit_type: Optional[str]) -> None:
        """Add a replacement operation."""
        self.add_edit(start_char, end_char, replacement, edit_type)

    def widen_to_lines(self, start_char: int, end_char: int) -> Tuple[int, int]:
        """
        Widen a range to whole lines when nothing but whitespace shares them.

        The result includes the leading indentation and the trailing line break,
        so deleting it leaves no blank line behind. Ranges sharing a line with
        other text are returned unchanged.
        """
        text = self.original_text
        line_start = text.rfind("\n", 0, start_char) + 1
        if text[line_start:start_char].strip():
            return start_char, end_char
        if end_char > start_char and text[end_char - 1] == "\n":
            return line_start, end_char

        line_end = text.find("\n", end_char)
        if line_end < 0:
            line_end = len(text)
        if text[end_char:line_end].strip():
            return start_char, end_char
        return line_start, min(line_end + 1, len(text))

    def validate_edits(self) -> List[str]:
        """Validate that all edits are within bounds."""
        errors = []
        for i, edit in enumerate(self.edits):
            if edit.range.start_char < 0:
                errors.append(f"Edit {i}: start_char ({edit.range.start_char}) is negative")
            if edit.range.end_char > len(self.original_text):
                errors.append(f"Edit {i}: end_char ({edit.range.end_char}) exceeds text length ({len(self.original_text)})")
        return errors

    def apply_edits(self) -> Tuple[str, Dict[str, Any]]:
        """
        Apply all edits and return the modified text and statistics.

        Returns:
            Tuple of (modified_text, statistics)
        """
        validation_errors = self.validate_edits()
        if validation_errors:
            raise ValueError(f"Edit validation failed: {'; '.join(validation_errors)}")

        stats: Dict[str, Any] = {
            "edits_applied": len(self.edits),
            "bytes_removed": 0,
            "bytes_added": 0,
            "by_type": {},
        }
        if not self.edits:
            stats["bytes_saved"] = 0
            return self.original_text, stats

        # Apply from the end so earlier offsets stay valid
        sorted_edits = sorted(self.edits, key=lambda e: e.range.start_char, reverse=True)

        result_text = self.original_text
        for edit in sorted_edits:
            original_chunk = result_text[edit.range.start_char:edit.range.end_char]
            result_text = result_text[:edit.range.start_char] + edit.replacement + result_text[edit.range.end_char:]

            stats["bytes_removed"] += len(original_chunk.encode("utf-8"))
            stats["bytes_added"] += len(edit.replacement.encode("utf-8"))
            if edit.type:
                stats["by_type"][edit.type] = stats["by_type"].get(edit.type, 0) + 1

        stats["bytes_saved"] = stats["bytes_removed"] - stats["bytes_added"]
        return result_text, stats
