import json
import logging
import os
from typing import Optional, Set

from core import constants

logger = logging.getLogger(__name__)


class SnapshotCache:
    """Read-only access to precomputed snapshots, one file per `<chain><key>`."""

    def __init__(self, cache_dir: str):
        self.cache_dir = cache_dir

    def get(self, chain: str, key: str) -> Optional[bytes]:
        path = os.path.join(self.cache_dir, f"{chain}{key}")
        try:
            with open(path, "rb") as f:
                return f.read()
        except FileNotFoundError:
            return None

    def get_program_members(self, chain: str) -> Set[str]:
        data = self.get(chain, constants.SNAPSHOT_ONE_KV)
        if data is None:
            logger.warning("No %s snapshot for chain %s", constants.SNAPSHOT_ONE_KV, chain)
            return set()

        try:
            snapshot = json.loads(data)
        except ValueError:
            logger.error(
                "Malformed %s snapshot for chain %s", constants.SNAPSHOT_ONE_KV, chain
            )
            return set()

        return {
            v["stash"]
            for v in snapshot.get("valid") or []
            if isinstance(v, dict) and v.get("stash")
        }
