# src/stepwise/ui/banner.py

from rich.console import Console
from rich.style import Style
from rich.text import Text

STEPWISE_ART = """
 ███████╗████████╗███████╗██████╗ ██╗    ██╗██╗███████╗███████╗
 ██╔════╝╚══██╔══╝██╔════╝██╔══██╗██║    ██║██║██╔════╝██╔════╝
 ███████╗   ██║   █████╗  ██████╔╝██║ █╗ ██║██║███████╗█████╗
 ╚════██║   ██║   ██╔══╝  ██╔═══╝ ██║███╗██║██║╚════██║██╔══╝
 ███████║   ██║   ███████╗██║     ╚███╔███╔╝██║███████║███████╗
 ╚══════╝   ╚═╝   ╚══════╝╚═╝      ╚══╝╚══╝ ╚═╝╚══════╝╚══════╝
"""

START_COLOR = "#00CED1"
END_COLOR = "#A060DD"


def _hex_to_rgb(h: str) -> tuple[int, int, int]:
    h = h.lstrip("#")
    return tuple(int(h[i:i + 2], 16) for i in (0, 2, 4))


def _blend(start: tuple[int, int, int], end: tuple[int, int, int], ratio: float) -> str:
    r, g, b = (int(s * (1 - ratio) + e * ratio) for s, e in zip(start, end))
    return f"#{r:02x}{g:02x}{b:02x}"


def build_banner(art: str = STEPWISE_ART) -> Text:
    """Return ``art`` as rich Text with a left-to-right colour gradient."""
    lines = art.strip("\n").split("\n")
    width = max((len(line) for line in lines), default=0)
    start, end = _hex_to_rgb(START_COLOR), _hex_to_rgb(END_COLOR)

    banner = Text()
    for line in lines:
        for index, char in enumerate(line.ljust(width)):
            if char.strip():
                colour = _blend(start, end, index / max(1, width - 1))
                banner.append(char, style=Style(color=colour, bold=True))
            else:
                banner.append(char)
        banner.append("\n")
    return banner


def print_banner(console: Console) -> None:
    console.print(build_banner())
