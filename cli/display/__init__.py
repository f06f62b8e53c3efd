"""
CLI display modules.
"""

from cli.display.tables import display_mus_info
from cli.display.hex_view import display_float_words

__all__ = [
    "display_mus_info",
    "display_float_words",
]
