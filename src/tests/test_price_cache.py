import threading
from unittest.mock import MagicMock

from services.price_cache import DailyPriceCache

DAY = 1614816000


def test_get_after_fill_does_not_fetch_again():
    cache = DailyPriceCache(maxsize=8, ttl=60)
    loader = MagicMock(return_value=2.5)

    assert cache.get_or_fetch(DAY, loader) == 2.5
    assert cache.get_or_fetch(DAY, loader) == 2.5
    assert cache.get(DAY) == 2.5
    loader.assert_called_once_with(DAY)


def test_miss_is_not_cached():
    cache = DailyPriceCache(maxsize=8, ttl=60)
    loader = MagicMock(return_value=None)

    assert cache.get_or_fetch(DAY, loader) is None
    assert cache.get_or_fetch(DAY, loader) is None
    assert loader.call_count == 2
    assert len(cache) == 0


def test_cache_is_bounded():
    cache = DailyPriceCache(maxsize=2, ttl=60)
    for i in range(5):
        cache.fill(DAY + i * 86400, float(i))

    assert len(cache) == 2


def test_entries_expire():
    now = [0.0]
    cache = DailyPriceCache(maxsize=8, ttl=10, timer=lambda: now[0])

    cache.fill(DAY, 1.0)
    assert cache.get(DAY) == 1.0

    now[0] = 11.0
    assert cache.get(DAY) is None


def test_concurrent_fills_of_same_day():
    cache = DailyPriceCache(maxsize=8, ttl=60)

    threads = [threading.Thread(target=cache.fill, args=(DAY, 3.0)) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert cache.get(DAY) == 3.0
    assert len(cache) == 1
