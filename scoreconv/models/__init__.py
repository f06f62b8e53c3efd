"""Data models for SCORE page representation."""

from scoreconv.models.item import Item, ItemKind, GenericItem, TextItem, GraphicItem
from scoreconv.models.trailer import Trailer, Unit
from scoreconv.models.document import Document, HeaderWidth

__all__ = [
    "Item",
    "ItemKind",
    "GenericItem",
    "TextItem",
    "GraphicItem",
    "Trailer",
    "Unit",
    "Document",
    "HeaderWidth",
]
