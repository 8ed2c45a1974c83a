import logging
import math
from typing import List, Optional

from sqlmodel import select

import schemas
from core.db import RecordStore
from models import Price, StashInfo
from services.price_cache import DailyPriceCache
from utils.extension_utils import day_bucket, to_milliseconds

logger = logging.getLogger(__name__)


class RewardService:
    def __init__(self, store: RecordStore, price_cache: DailyPriceCache):
        self.store = store
        self.price_cache = price_cache

    def get_price_of_day(self, day: int) -> Optional[float]:
        with self.store.session() as session:
            price = session.get(Price, day)
        return price.price if price else None

    def get_stash_rewards(self, stash: str) -> schemas.StashRewards:
        """Per-era payouts of `stash` valued at the price of their day.

        Rows without an era are skipped. A day with no recorded price values
        its payout at 0.
        """
        with self.store.session() as session:
            rows = session.exec(
                select(StashInfo).where(StashInfo.stash == stash).order_by(StashInfo.id)
            ).all()

        era_rewards: List[schemas.StashEraReward] = []
        for row in rows:
            if row.era is None:
                logger.debug("Skipping reward of %s without era (id=%s)", stash, row.id)
                continue

            amount = row.amount if row.amount is not None else 0.0
            timestamp = to_milliseconds(row.timestamp)
            day = day_bucket(timestamp)

            price = self.price_cache.get_or_fetch(day, self.get_price_of_day)
            if price is None:
                logger.debug("No price for day %s", day)
                price = 0.0

            era_rewards.append(
                schemas.StashEraReward(
                    era=row.era,
                    amount=amount,
                    timestamp=timestamp,
                    price=price,
                    total=price * amount,
                )
            )

        return schemas.StashRewards(
            stash=stash,
            era_rewards=era_rewards,
            total_in_fiat=math.fsum(r.total for r in era_rewards),
        )

    def get_stash_payouts(
        self, stash: str, from_era: int, to_era: int
    ) -> List[schemas.StashPayout]:
        with self.store.session() as session:
            rows = session.exec(
                select(StashInfo)
                .where(
                    StashInfo.stash == stash,
                    StashInfo.era >= from_era,
                    StashInfo.era <= to_era,
                )
                .order_by(StashInfo.era, StashInfo.id)
            ).all()

        return [
            schemas.StashPayout(
                address=row.stash,
                era=row.era,
                amount=row.amount if row.amount is not None else 0.0,
                timestamp=to_milliseconds(row.timestamp),
            )
            for row in rows
        ]
