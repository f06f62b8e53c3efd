"""
Converters between binary MUS and PMX text.

This module provides bidirectional conversion between:
- binary SCORE (.mus/.pag) files
- PMX parameter matrix (.pmx) text

Example:
    from scoreconv.converters import convert_mus_to_pmx, convert_pmx_to_mus

    # Binary page to text
    convert_mus_to_pmx("page.mus", "page.pmx")

    # Text back to binary
    convert_pmx_to_mus("page.pmx", "page.mus")
"""

from scoreconv.converters.mus_to_pmx import MusToPmxConverter, PageResult, convert_mus_to_pmx
from scoreconv.converters.pmx_to_mus import PmxToMusConverter, convert_pmx_to_mus

__all__ = [
    "MusToPmxConverter",
    "PmxToMusConverter",
    "PageResult",
    "convert_mus_to_pmx",
    "convert_pmx_to_mus",
]
