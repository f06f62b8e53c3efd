"""
MUS item codec.

Each binary item is a float word count followed by that many 4-byte
words. The first word is always the type code P1; what follows depends
on it:

    P1 = 16 (text)
        P2..P12     11 floats, P12 = number of characters
        P13         text width
        string      P12 bytes, space padded to a multiple of 4

    P1 = 15 (EPS graphic)
        P2..P13     12 floats
        filename    (word count - 13) words, space padded

    anything else
        P2..Pn      (word count - 1) floats

Numeric parameters are passed through round3() on decode; the type code
is kept as stored.
"""

import math

from scoreconv.errors import (
    GraphicFilenameMissing,
    GraphicFilenameTooLong,
    GraphicItemTooFewParams,
    TextItemTooShort,
    TextTooLong,
)
from scoreconv.models.item import GenericItem, GraphicItem, Item, ItemKind, TextItem
from scoreconv.utils.binary import ByteCursor, pack_float, pad_to_word, word_span
from scoreconv.utils.numbers import round3
from scoreconv.utils.validation import GRAPHIC_TYPE, MAX_TYPE_CODE, TEXT_TYPE, validate_type_code


class ItemCodec:
    """
    Decoder and encoder for single MUS items.

    Example:
        body = cursor.sub_cursor(4 * word_count)
        item = ItemCodec.decode_item(body, word_count)
        data = ItemCodec.encode_item(item)
    """

    MAX_TYPE_CODE = MAX_TYPE_CODE
    MAX_TEXT_BYTES = 1024
    MAX_FILENAME_WORDS = 200

    # Words after P1 that precede the text string (P2..P13)
    TEXT_FIXED_WORDS = 12
    # Words before the graphic filename (P1..P13)
    GRAPHIC_FIXED_WORDS = 13

    @classmethod
    def decode_item(cls, body: ByteCursor, word_count: int) -> Item:
        """
        Decode one item body.

        Args:
            body: Cursor over exactly the item's word_count words
            word_count: Declared number of words in the item

        Returns:
            GenericItem, TextItem or GraphicItem

        Raises:
            MusFormatError: On any invalid field
        """
        offset = body.position
        type_code = body.read_float()
        validate_type_code(type_code, offset, cls.MAX_TYPE_CODE)

        if type_code == TEXT_TYPE:
            return cls._decode_text(body, word_count, offset)
        if type_code == GRAPHIC_TYPE:
            return cls._decode_graphic(body, word_count, offset)

        params = [round3(body.read_float()) for _ in range(word_count - 1)]
        return GenericItem(type_code, params)

    @classmethod
    def _decode_text(cls, body: ByteCursor, word_count: int, offset: int) -> TextItem:
        if word_count - 1 < cls.TEXT_FIXED_WORDS:
            raise TextItemTooShort(
                f"text item must have {cls.TEXT_FIXED_WORDS + 1} fixed parameters, "
                f"but there are instead {word_count}",
                offset,
            )

        fixed = [round3(body.read_float()) for _ in range(TextItem.FIXED_COUNT)]
        width = round3(body.read_float())

        length = fixed[TextItem.LENGTH_INDEX]
        if not math.isfinite(length):
            raise TextTooLong(f"invalid text length in P12: {length}", offset)

        char_count = int(length)
        if char_count < 0 or char_count > cls.MAX_TEXT_BYTES:
            raise TextTooLong(f"invalid text length in P12: {char_count}", offset)

        text = body.read_bytes(char_count)
        # padding is normally spaces but not always; it is never inspected
        body.skip((4 - char_count % 4) % 4)

        return TextItem(fixed, text, width)

    @classmethod
    def _decode_graphic(cls, body: ByteCursor, word_count: int, offset: int) -> GraphicItem:
        if word_count < cls.GRAPHIC_FIXED_WORDS:
            raise GraphicItemTooFewParams(
                f"EPS graphic item has too few parameters: {word_count}", offset
            )

        fixed = [round3(body.read_float()) for _ in range(GraphicItem.FIXED_COUNT)]

        name_words = word_count - cls.GRAPHIC_FIXED_WORDS
        if name_words <= 0:
            raise GraphicFilenameMissing("expecting non-zero count for P1=15 filename", offset)
        if name_words > cls.MAX_FILENAME_WORDS:
            raise GraphicFilenameTooLong(
                f"P1=15 filename too long: {name_words} words", offset
            )

        filename = body.read_bytes(4 * name_words).rstrip(b" ")
        return GraphicItem(fixed, filename)

    @classmethod
    def encode_item(cls, item: Item) -> bytes:
        """
        Encode one item, word count first.

        Args:
            item: Item to encode

        Returns:
            4 * (item.word_count + 1) bytes

        Raises:
            MusFormatError: If the item could not be read back
        """
        if item.kind is ItemKind.TEXT:
            return cls._encode_text(item)
        if item.kind is ItemKind.GRAPHIC:
            return cls._encode_graphic(item)

        validate_type_code(item.type_code, limit=cls.MAX_TYPE_CODE)
        return cls._pack_words(item.values)

    @classmethod
    def _encode_text(cls, item: TextItem) -> bytes:
        if len(item.text) > cls.MAX_TEXT_BYTES:
            raise TextTooLong(f"text is {len(item.text)} bytes, limit is {cls.MAX_TEXT_BYTES}")

        fixed = list(item.fixed_params)
        fixed[TextItem.LENGTH_INDEX] = float(len(item.text))
        words = [TEXT_TYPE] + fixed + [item.width]

        return cls._pack_words(words, pad_to_word(item.text))

    @classmethod
    def _encode_graphic(cls, item: GraphicItem) -> bytes:
        if not item.filename:
            raise GraphicFilenameMissing("graphic item has an empty filename")
        if word_span(len(item.filename)) > cls.MAX_FILENAME_WORDS:
            raise GraphicFilenameTooLong(
                f"filename is {len(item.filename)} bytes, "
                f"limit is {4 * cls.MAX_FILENAME_WORDS}"
            )

        return cls._pack_words(item.values, pad_to_word(item.filename))

    @staticmethod
    def _pack_words(words, payload: bytes = b"") -> bytes:
        word_count = len(words) + len(payload) // 4
        parts = [pack_float(float(word_count))]
        parts.extend(pack_float(w) for w in words)
        parts.append(payload)
        return b"".join(parts)
