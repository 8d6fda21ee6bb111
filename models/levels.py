from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional


class InvalidPriceWindowError(ValueError):
    """Raised when a price window cannot be analyzed."""


@dataclass(frozen=True)
class PriceWindow:
    """Recent trading range plus the latest quote for one instrument."""

    high: float
    low: float
    close: float
    current_price: float

    def validate(self) -> "PriceWindow":
        """Return a float-only copy of the window, or raise if it is unusable."""

        values = {
            name: _as_price(name, getattr(self, name))
            for name in ("high", "low", "close", "current_price")
        }

        if values["current_price"] <= 0:
            raise InvalidPriceWindowError("current_price must be greater than zero")
        if values["high"] < values["low"]:
            raise InvalidPriceWindowError(
                f"high ({values['high']}) is below low ({values['low']})"
            )
        return PriceWindow(**values)


def _as_price(name: str, value: Any) -> float:
    # numpy scalars and Decimal are accepted; bool and strings are not
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal)):
        raise InvalidPriceWindowError(f"{name} must be numeric, got {value!r}")
    try:
        price = float(value)
    except (OverflowError, ValueError) as err:
        raise InvalidPriceWindowError(f"{name} is not a usable price: {err}") from err
    if not math.isfinite(price):
        raise InvalidPriceWindowError(f"{name} must be finite, got {value!r}")
    if price < 0:
        raise InvalidPriceWindowError(f"{name} must be non-negative, got {value!r}")
    return price


@dataclass(frozen=True)
class Candidate:
    label: str
    price: float
    weight: int


@dataclass
class Cluster:
    """Candidates treated as one level; ``price`` stays at the anchor candidate."""

    price: float
    strength: float
    sources: List[str] = field(default_factory=list)

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> "Cluster":
        return cls(
            price=candidate.price,
            strength=candidate.weight,
            sources=[candidate.label],
        )

    def absorb(self, candidate: Candidate) -> None:
        self.strength += candidate.weight
        self.sources.append(candidate.label)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "price": self.price,
            "strength": self.strength,
            "sources": list(self.sources),
        }


@dataclass
class LevelSet:
    support: List[Cluster] = field(default_factory=list)
    resistance: List[Cluster] = field(default_factory=list)

    @property
    def support_prices(self) -> List[float]:
        return [c.price for c in self.support]

    @property
    def resistance_prices(self) -> List[float]:
        return [c.price for c in self.resistance]

    @property
    def support_strength(self) -> List[float]:
        return [c.strength for c in self.support]

    @property
    def resistance_strength(self) -> List[float]:
        return [c.strength for c in self.resistance]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "support": [c.to_dict() for c in self.support],
            "resistance": [c.to_dict() for c in self.resistance],
        }


@dataclass(frozen=True)
class LevelResult:
    """Outcome of an analysis: computed levels, or the basic fallback set."""

    levels: LevelSet
    is_fallback: bool = False
    error: Optional[str] = None

    @classmethod
    def ok(cls, levels: LevelSet) -> "LevelResult":
        return cls(levels=levels)

    @classmethod
    def fallback(cls, levels: LevelSet, error: BaseException | str) -> "LevelResult":
        return cls(levels=levels, is_fallback=True, error=str(error))
