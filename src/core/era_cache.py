import threading
from typing import Dict

from core import constants


class CurrentEraCache:
    """Latest active era per chain.

    Written by the era poller, read by request handlers. A chain that was never
    written reads as `constants.ERA_UNSET`.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._eras: Dict[str, int] = {}

    def set(self, chain: str, era: int) -> None:
        with self._lock:
            self._eras[chain] = era

    def get(self, chain: str) -> int:
        with self._lock:
            return self._eras.get(chain, constants.ERA_UNSET)

    def is_set(self, chain: str) -> bool:
        return self.get(chain) != constants.ERA_UNSET
