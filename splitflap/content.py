"""
Content Layout - Reflows text into a fixed-size buffer of flap symbols
Wraps words to the grid width, aligns the lines inside the grid and
flattens the result row by row.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class HorizontalAlignment(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


class VerticalAlignment(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    CENTER = "center"


@dataclass(frozen=True)
class DisplayContent:
    """Text plus the layout options it should be shown with"""
    text: str = ""
    horizontal_alignment: HorizontalAlignment = HorizontalAlignment.LEFT
    vertical_alignment: VerticalAlignment = VerticalAlignment.TOP
    scale: float = 1.0

    def to_dict(self) -> dict:
        return {
            'text': self.text,
            'horizontal_alignment': HorizontalAlignment(self.horizontal_alignment).value,
            'vertical_alignment': VerticalAlignment(self.vertical_alignment).value,
            'scale': self.scale,
        }


def wrap_lines(text: str, max_length: int) -> List[str]:
    """
    Break text into lines of at most max_length characters.

    Explicit line breaks are kept, including blank lines. Words are packed
    greedily; a word longer than max_length stays whole on its own line.
    """
    result = []
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")

    for raw_line in normalized.split("\n"):
        current_line = ""

        for word in raw_line.split(" "):
            if not word:
                continue
            if not current_line:
                current_line = word
            elif len(current_line) + len(word) + 1 <= max_length:
                current_line += " " + word
            else:
                result.append(current_line)
                current_line = word

        if current_line:
            result.append(current_line)
        elif not raw_line:
            # Intentional blank line
            result.append("")

    return result


def pad_line(line: str, length: int,
             alignment: HorizontalAlignment = HorizontalAlignment.LEFT) -> str:
    """Pad line with spaces to length; longer lines are returned unchanged"""
    spaces = length - len(line)
    if spaces <= 0:
        return line

    if alignment == HorizontalAlignment.RIGHT:
        return " " * spaces + line
    if alignment == HorizontalAlignment.CENTER:
        left = spaces // 2
        return " " * left + line + " " * (spaces - left)
    return line + " " * spaces


def align_vertically(lines: List[str], rows: int,
                     alignment: VerticalAlignment = VerticalAlignment.TOP) -> List[str]:
    """Add blank lines around the content so it fills rows"""
    missing = rows - len(lines)
    if missing <= 0:
        return list(lines)

    if alignment == VerticalAlignment.BOTTOM:
        return [""] * missing + lines
    if alignment == VerticalAlignment.CENTER:
        top = missing // 2
        return [""] * top + lines + [""] * (missing - top)
    return lines + [""] * missing


def fit_to_capacity(content: str, capacity: int) -> Tuple[str, ...]:
    """Truncate or space-pad content to exactly max(1, capacity) symbols"""
    capacity = max(1, capacity)
    symbols = list(content[:capacity])
    symbols.extend(" " * (capacity - len(symbols)))
    return tuple(symbols)


def layout_content(text: str, capacity: int, columns: int, rows: int,
                   horizontal_alignment: HorizontalAlignment = HorizontalAlignment.LEFT,
                   vertical_alignment: VerticalAlignment = VerticalAlignment.TOP) -> Tuple[str, ...]:
    """
    Lay text out on a columns x rows grid.

    Args:
        text: Raw text, may contain any line-ending style
        capacity: Number of cells to fill
        columns: Grid width in cells
        rows: Grid height in cells
        horizontal_alignment: left, right or center
        vertical_alignment: top, bottom or center

    Returns:
        Tuple of exactly max(1, capacity) symbols in row-major order
    """
    line_length = max(0, columns)
    max_lines = max(1, rows)

    lines = wrap_lines(text, line_length)[:max_lines]
    lines = align_vertically(lines, max_lines, VerticalAlignment(vertical_alignment))

    alignment = HorizontalAlignment(horizontal_alignment)
    content = "".join(pad_line(line, line_length, alignment) for line in lines)

    return fit_to_capacity(content, capacity)
