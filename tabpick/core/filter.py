"""
Substring filtering for tab names.

Matching is exact substring containment only. When ``ignore_case`` is set both
operands are lowercased before comparing; the filter text is never assumed to
be pre-folded.
"""

from __future__ import annotations

from dataclasses import dataclass


def matches(name: str, filter_text: str, ignore_case: bool) -> bool:
    """
    Return True when ``name`` passes ``filter_text``.

    Args:
        name: Tab name as reported by the host
        filter_text: Current filter buffer (empty matches everything)
        ignore_case: Compare case-insensitively

    Returns:
        True if ``filter_text`` is a contiguous substring of ``name``
    """
    if not filter_text:
        return True
    if ignore_case:
        return filter_text.lower() in name.lower()
    return filter_text in name


@dataclass
class FilterState:
    """The live filter buffer plus the case-sensitivity flag it is applied with."""

    text: str = ""
    ignore_case: bool = True

    def accepts(self, name: str) -> bool:
        return matches(name, self.text, self.ignore_case)

    def push(self, ch: str) -> None:
        self.text += ch

    def pop(self) -> None:
        self.text = self.text[:-1]

    def clear(self) -> None:
        self.text = ""
