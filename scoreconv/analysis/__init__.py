"""Analysis tools for binary SCORE files."""

from scoreconv.analysis.mus_analyzer import MusAnalyzer, MusAnalysis, item_type_name

__all__ = ["MusAnalyzer", "MusAnalysis", "item_type_name"]
