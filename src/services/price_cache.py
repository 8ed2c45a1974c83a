import threading
import time
from typing import Callable, Optional

from cachetools import TTLCache


class DailyPriceCache:
    """Price per UTC day, shared by every request of the process.

    Keys are UTC-midnight timestamps in seconds. Only prices that were found
    are stored, so a day missing from the store is looked up again next time.
    """

    def __init__(
        self,
        maxsize: int = 4096,
        ttl: float = 60 * 60 * 6,
        timer=time.monotonic,
    ):
        self._cache = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)
        self._lock = threading.Lock()

    def get(self, day: int) -> Optional[float]:
        with self._lock:
            return self._cache.get(day)

    def fill(self, day: int, price: float) -> None:
        with self._lock:
            self._cache[day] = price

    def get_or_fetch(
        self, day: int, loader: Callable[[int], Optional[float]]
    ) -> Optional[float]:
        price = self.get(day)
        if price is not None:
            return price

        price = loader(day)
        if price is not None:
            self.fill(day, price)
        return price

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self):
        with self._lock:
            return len(self._cache)

