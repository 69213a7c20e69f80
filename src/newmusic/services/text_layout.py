"""
Greedy word wrap for the card's text blocks.
"""

from typing import Callable

Measure = Callable[[str], float]
Draw = Callable[[str, int, int], None]


def wrap_text(
    text: str,
    x: int,
    y: int,
    max_width: float,
    line_height: int,
    measure: Measure,
    draw: Draw,
) -> int:
    """
    Draw ``text`` as lines no wider than ``max_width`` where possible.

    Words are split on single spaces and never broken. A word that does not
    fit moves to a new line, except the first word of the text, which is
    always placed even when it alone is wider than ``max_width``. The last
    partial line is always drawn.

    Args:
        text: Text to lay out
        x: Left edge of every line
        y: Baseline of the first line
        max_width: Width a line may not exceed
        line_height: Vertical advance between lines
        measure: Width of a string in the current font
        draw: Called once per line with (line, x, y)

    Returns:
        Baseline of the last drawn line. Callers add their own spacing
        before stacking the next block.
    """
    words = text.split(" ")
    line = ""
    for index, word in enumerate(words):
        candidate = line + word + " "
        if measure(candidate) > max_width and index > 0:
            draw(line.rstrip(" "), x, y)
            line = word + " "
            y += line_height
        else:
            line = candidate
    draw(line.rstrip(" "), x, y)
    return y
