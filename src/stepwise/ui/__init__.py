"""Terminal presentation for Stepwise."""

from .banner import build_banner, print_banner
from .console_display import ConsoleDisplay

__all__ = [
    "ConsoleDisplay",
    "build_banner",
    "print_banner",
]
