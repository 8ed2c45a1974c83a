import logging

from sqlmodel import select

import schemas
from core.db import RecordStore
from core.errors import NotFound
from models import Nominator
from services.reward_service import RewardService

logger = logging.getLogger(__name__)


class NominatorService:
    def __init__(self, store: RecordStore, reward_service: RewardService):
        self.store = store
        self.reward_service = reward_service

    def get_nominator_info(self, stash: str) -> schemas.NominatorNomination:
        """Account, balance and targets of a nominator with its valued rewards."""
        rewards = self.reward_service.get_stash_rewards(stash)

        with self.store.session() as session:
            nominator = session.exec(
                select(Nominator).where(Nominator.address == stash)
            ).first()
        if nominator is None:
            raise NotFound(f"Cannot find stash {stash}")

        return schemas.NominatorNomination(
            account_id=nominator.address,
            balance=nominator.balance or {},
            targets=list(nominator.targets or []),
            rewards=rewards,
        )
