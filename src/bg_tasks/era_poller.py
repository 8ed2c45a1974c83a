import asyncio
import logging
from typing import Dict, Iterable, List, Optional

import click

from core.config import Settings, get_settings
from core.db import RecordStore, create_chain_stores
from core.era_cache import CurrentEraCache
from core.errors import StoreUnavailable
from log import setup_logging_to_console, setup_logging_to_file

logger = logging.getLogger(__name__)


class EraPoller:
    """Keeps the active era of each chain in a `CurrentEraCache`.

    A chain whose store cannot be connected at start is not polled at all.
    Once connected, read failures are logged and retried on the next tick.
    """

    def __init__(
        self,
        stores: Dict[str, RecordStore],
        era_cache: CurrentEraCache,
        interval: float = 600,
    ):
        self.stores = stores
        self.era_cache = era_cache
        self.interval = interval
        self._stop = asyncio.Event()
        self._tasks: List[asyncio.Task] = []

    async def poll_chain(self, chain: str) -> None:
        store = self.stores[chain]
        try:
            await asyncio.to_thread(store.connect)
        except StoreUnavailable as e:
            logger.warning("Era poller for %s not started: %s", chain, e)
            return

        logger.info("Polling active era of %s every %ss", chain, self.interval)
        while not self._stop.is_set():
            await self.refresh(chain)
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass

        logger.info("Era poller for %s stopped", chain)

    async def refresh(self, chain: str) -> Optional[int]:
        try:
            chain_info = await asyncio.to_thread(self.stores[chain].get_chain_info)
        except Exception as e:
            logger.error("Failed to read active era of %s: %s", chain, e, exc_info=True)
            return None

        previous = self.era_cache.get(chain)
        self.era_cache.set(chain, chain_info.active_era)
        if previous != chain_info.active_era:
            logger.info("Active era of %s is now %s", chain, chain_info.active_era)
        return chain_info.active_era

    def start(self, chains: Iterable[str]) -> List[asyncio.Task]:
        self._stop.clear()
        self._tasks = [
            asyncio.create_task(self.poll_chain(chain), name=f"era-poller-{chain}")
            for chain in chains
            if chain in self.stores
        ]
        return self._tasks

    async def stop(self) -> None:
        self._stop.set()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []

    async def run(self, chains: Iterable[str]) -> None:
        await asyncio.gather(*self.start(chains))


def create_era_poller(settings: Settings, stores, era_cache) -> EraPoller:
    return EraPoller(stores, era_cache, interval=settings.ERA_POLL_INTERVAL_SECONDS)


@click.command()
@click.option(
    "--chain",
    "chains",
    multiple=True,
    help="Chain to poll (KSM, DOT, WND). Defaults to ERA_POLL_CHAINS",
)
def main(chains):
    settings = get_settings()
    setup_logging_to_console()
    setup_logging_to_file(
        app="era_poller", level=logging.INFO, logger=logger, settings=settings
    )

    chains = [c.upper() for c in chains] or settings.ERA_POLL_CHAINS
    poller = create_era_poller(
        settings, create_chain_stores(settings), CurrentEraCache()
    )
    asyncio.run(poller.run(chains))


if __name__ == "__main__":
    main()
