from .rounding import round_half_away, round_price, round_to_integer

__all__ = ["round_half_away", "round_price", "round_to_integer"]
