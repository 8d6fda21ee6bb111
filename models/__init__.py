from models.levels import (
    Candidate,
    Cluster,
    InvalidPriceWindowError,
    LevelResult,
    LevelSet,
    PriceWindow,
)
from models.market import IndexQuote, MarketSnapshot, SymbolMatch

__all__ = [
    "Candidate",
    "Cluster",
    "IndexQuote",
    "InvalidPriceWindowError",
    "LevelResult",
    "LevelSet",
    "MarketSnapshot",
    "PriceWindow",
    "SymbolMatch",
]
