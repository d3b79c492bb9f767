"""Report rendering modules."""

from cube_overview.report.markdown_gen import DeckRenderer, OverviewRenderer

__all__ = [
    "DeckRenderer",
    "OverviewRenderer",
]
