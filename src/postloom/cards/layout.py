"""Text layout for social cards."""

from __future__ import annotations

from collections.abc import Callable

from PIL import ImageDraw, ImageFont

Measure = Callable[[str], float]


def wrap_words(text: str, max_width: float, measure: Measure) -> list[str]:
    """Greedily pack words onto lines no wider than ``max_width``.

    Each candidate line is the current line plus the next word and a trailing
    space. When the candidate is wider than ``max_width`` the current line is
    committed and the word starts a new one. A word that is too wide on its
    own still gets a line of its own. Lines are returned without the trailing
    space.

    Examples:
        >>> wrap_words("aaaa bbbb cccc dddd eeee", 150, lambda s: len(s) * 10)
        ['aaaa bbbb cccc', 'dddd eeee']

    """
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current}{word} "
        if current and measure(candidate) > max_width:
            lines.append(current.rstrip(" "))
            current = f"{word} "
        else:
            current = candidate
    if current:
        lines.append(current.rstrip(" "))
    return lines


def draw_text(
    draw: ImageDraw.ImageDraw,
    text: str,
    xy: tuple[int, int],
    max_width: int,
    line_height: int,
    font: ImageFont.FreeTypeFont,
    fill: str,
) -> int:
    """Draw wrapped ``text`` with its first baseline at ``xy``.

    Returns the baseline y of the line after the last one drawn.
    """
    x, y = xy
    for line in wrap_words(text, max_width, lambda candidate: draw.textlength(candidate, font=font)):
        draw.text((x, y), line, font=font, fill=fill, anchor="ls")
        y += line_height
    return y


def draw_line(
    draw: ImageDraw.ImageDraw,
    text: str,
    xy: tuple[int, int],
    font: ImageFont.FreeTypeFont,
    fill: str,
) -> None:
    """Draw a single unwrapped line with its baseline at ``xy``."""
    draw.text(xy, text, font=font, fill=fill, anchor="ls")
