"""Test configuration and fixtures.

MUS data is built in memory with struct so every test documents the exact
bytes it feeds the codec.
"""

import struct
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))


def f32(*values) -> bytes:
    """Pack values as little-endian 4-byte floats."""
    return struct.pack(f"<{len(values)}f", *values)


def build_item(*words, payload: bytes = b"") -> bytes:
    """One item: float word count, the words, then a byte payload."""
    count = len(words) + len(payload) // 4
    return f32(float(count), *words) + payload


def build_trailer(
    field_count: float = 5.0,
    unit: float = 0.0,
    version: float = 4.0,
    serial: float = 4000000.0,
    sentinel: float = -9999.0,
    reserved=(),
) -> bytes:
    """Trailer words in file order, start marker first."""
    words = [0.0, *reserved]
    if field_count > 4.0:
        words.append(serial)
    words.extend([version, unit, field_count, sentinel])
    return f32(*words)


def build_mus(items: bytes, trailer: bytes = None, header_width: int = 2, word_count: int = None) -> bytes:
    """Header word count, items and trailer."""
    trailer = build_trailer() if trailer is None else trailer
    body = items + trailer
    if word_count is None:
        word_count = len(body) // 4
    header = struct.pack("<H" if header_width == 2 else "<I", word_count)
    return header + body


def text_item(text: bytes, width: float = 0.0, params=None) -> bytes:
    """A P1=16 text item with P12 set to the string length."""
    fixed = list(params) if params is not None else [float(n) for n in range(1, 11)]
    padded = text + b" " * ((4 - len(text) % 4) % 4)
    return build_item(16.0, *fixed, float(len(text)), width, payload=padded)


def graphic_item(filename: bytes, params=None) -> bytes:
    """A P1=15 graphic item with a space padded filename."""
    fixed = list(params) if params is not None else [0.0] * 12
    padded = filename + b" " * ((4 - len(filename) % 4) % 4)
    return build_item(15.0, *fixed, payload=padded)


@pytest.fixture
def scenario_data():
    """Single P1=5 item under a 4-field trailer with no serial."""
    return build_mus(build_item(5.0, 7.5), build_trailer(field_count=4.0))


@pytest.fixture
def page_data():
    """A page with a note, a text item and an EPS graphic."""
    items = (
        build_item(1.0, 1.0, 10.0, 0.0, 1.0)
        + text_item(b"Hello", width=12.5)
        + graphic_item(b"fig.eps")
    )
    return build_mus(items)


@pytest.fixture
def mus_file(tmp_path, page_data):
    """page_data written to disk."""
    path = tmp_path / "page.mus"
    path.write_bytes(page_data)
    return path


@pytest.fixture
def bad_mus_file(tmp_path, page_data):
    """page_data with its sentinel overwritten."""
    path = tmp_path / "bad.mus"
    path.write_bytes(page_data[:-4] + f32(-9998.0))
    return path
