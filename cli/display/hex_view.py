"""
Hex dump display utilities.
"""

import struct

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

console = Console()


def display_float_words(data: bytes, title: str = "Words", start_offset: int = 0) -> None:
    """Display 4-byte aligned data as little-endian floats, one word per line."""

    lines = []
    for offset in range(0, len(data) - len(data) % 4, 4):
        word = data[offset : offset + 4]
        (value,) = struct.unpack("<f", word)

        hex_str = " ".join(f"{b:02X}" for b in word)
        ascii_str = "".join(chr(b) if 32 <= b < 127 else "." for b in word)

        lines.append(
            f"[dim]{start_offset + offset:08X}[/dim]  {hex_str}  "
            f"[cyan]{escape(ascii_str)}[/cyan]  {value:14.3f}"
        )

    if not lines:
        lines.append("[dim](no words)[/dim]")

    console.print(Panel("\n".join(lines), title=title, border_style="blue", expand=False))
