# market.py
import math
from typing import Iterable, Optional

import numpy as np


def _clean_prices(prices: Optional[Iterable[float]]) -> np.ndarray:
    if prices is None:
        return np.array([], dtype=float)
    arr = np.array([p for p in prices if p is not None], dtype=float)
    # unusable prices never enter a baseline
    return arr[np.isfinite(arr) & (arr > 0)]


class MarketBaseline:
    """
    Price baseline built from established carriers' quotes.
    Uses the cheaper half only: the upper half is closed books, outlier
    pricing and standard rates, none of which an entrant is competing with.
    """
    def __init__(self, established_prices: Optional[Iterable[float]]):
        self.prices = np.sort(_clean_prices(established_prices))

    def __len__(self) -> int:
        return int(self.prices.size)

    def cheapest_half(self) -> np.ndarray:
        if self.prices.size == 0:
            return self.prices
        return self.prices[: math.ceil(self.prices.size / 2)]

    def average(self) -> Optional[float]:
        """Mean of the cheapest ceil(n/2) prices; None without established peers."""
        half = self.cheapest_half()
        if half.size == 0:
            return None
        return float(np.mean(half))

    def percent_below(self, price: float) -> Optional[float]:
        """(baseline - price) / baseline as a fraction; negative when above market."""
        avg = self.average()
        if avg is None or avg <= 0:
            return None
        return (avg - price) / avg


def mean_premium(premiums: Optional[Iterable[float]]) -> Optional[float]:
    arr = np.array([p for p in (premiums or []) if p is not None], dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        return None
    return float(np.mean(arr))
