import logging
from typing import List, Sequence

from sqlmodel import select

import schemas
from core.db import RecordStore
from models import Commission, InactiveEvent, StalePayout, ValidatorSlash
from services import join_normalizer
from services.reward_service import RewardService

logger = logging.getLogger(__name__)


class StakingEventsService:
    """Era-range events of a stash and the validators it nominates.

    Both ends of the era range are inclusive.
    """

    def __init__(self, store: RecordStore, reward_service: RewardService):
        self.store = store
        self.reward_service = reward_service

    def get_commission_changes(
        self, validators: Sequence[str], from_era: int, to_era: int
    ) -> List[schemas.ValidatorCommission]:
        if not validators:
            return []
        with self.store.session() as session:
            rows = session.exec(
                select(Commission)
                .where(
                    Commission.address.in_(list(validators)),
                    Commission.era >= from_era,
                    Commission.era <= to_era,
                )
                .order_by(Commission.id)
            ).all()
        return [
            schemas.ValidatorCommission(
                address=row.address,
                era=row.era,
                commission_from=row.commission_from,
                commission_to=row.commission_to,
            )
            for row in rows
        ]

    def get_stale_payout_events(
        self, validators: Sequence[str], from_era: int, to_era: int
    ) -> List[schemas.ValidatorStalePayoutEvent]:
        if not validators:
            return []
        with self.store.session() as session:
            rows = session.exec(
                select(StalePayout)
                .where(
                    StalePayout.address.in_(list(validators)),
                    StalePayout.era >= from_era,
                    StalePayout.era <= to_era,
                )
                .order_by(StalePayout.id)
            ).all()
        return [
            schemas.ValidatorStalePayoutEvent(
                address=row.address,
                era=row.era,
                unclaimed_payout_eras=list(row.unclaimed_payout_eras or []),
            )
            for row in rows
        ]

    def get_inactive_eras(self, stash: str, from_era: int, to_era: int) -> List[int]:
        with self.store.session() as session:
            rows = session.exec(
                select(InactiveEvent)
                .where(
                    InactiveEvent.address == stash,
                    InactiveEvent.era >= from_era,
                    InactiveEvent.era <= to_era,
                )
                .order_by(InactiveEvent.era)
            ).all()
        return [row.era for row in rows]

    def get_slashes(
        self, validators: Sequence[str], from_era: int, to_era: int
    ) -> List[schemas.ValidatorSlash]:
        if not validators:
            return []
        with self.store.session() as session:
            rows = session.exec(
                select(ValidatorSlash)
                .where(
                    ValidatorSlash.address.in_(list(validators)),
                    ValidatorSlash.era >= from_era,
                    ValidatorSlash.era <= to_era,
                )
                .order_by(ValidatorSlash.id)
            ).all()
        return [
            schemas.ValidatorSlash.model_validate(join_normalizer.normalize_slash(row))
            for row in rows
        ]

    def get_staking_events(
        self, stash: str, validators: Sequence[str], from_era: int, to_era: int
    ) -> schemas.StakingEvents:
        if from_era > to_era:
            raise ValueError(f"from_era {from_era} is after to_era {to_era}")

        logger.debug(
            "Collecting events of %s over %d validators, eras %d..%d",
            stash,
            len(validators),
            from_era,
            to_era,
        )
        return schemas.StakingEvents(
            commissions=self.get_commission_changes(validators, from_era, to_era),
            slashes=self.get_slashes(validators, from_era, to_era),
            inactive=self.get_inactive_eras(stash, from_era, to_era),
            stale_payouts=self.get_stale_payout_events(validators, from_era, to_era),
            payouts=self.reward_service.get_stash_payouts(stash, from_era, to_era),
        )
