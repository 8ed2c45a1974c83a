import logging
from typing import Dict, List, Optional, Sequence

from sqlmodel import Session, select

import schemas
from core import constants
from core.db import RecordStore
from core.era_cache import CurrentEraCache
from core.errors import NotFound
from core.snapshot_cache import SnapshotCache
from models import Nomination, Nominator, UnclaimedEraInfo, Validator, ValidatorSlash
from services import join_normalizer

logger = logging.getLogger(__name__)


class ValidatorService:
    """Era scoped and stash scoped views of validators.

    Joins nominations with validator metadata, unclaimed eras and slashes, and
    hands the joined rows to the join normalizer for default-fill.
    """

    def __init__(
        self,
        store: RecordStore,
        chain: str,
        era_cache: Optional[CurrentEraCache] = None,
        snapshot_cache: Optional[SnapshotCache] = None,
    ):
        self.store = store
        self.chain = chain
        self.era_cache = era_cache
        self.snapshot_cache = snapshot_cache

    def get_active_era(self) -> int:
        if self.era_cache is not None and self.era_cache.is_set(self.chain):
            return self.era_cache.get(self.chain)

        logger.info("Era of %s not cached yet, reading chain info", self.chain)
        return self.store.get_chain_info().active_era

    def get_all_validator_info_of_era(
        self, era: int, options: schemas.ValidatorListOptions
    ) -> List[schemas.ValidatorNominationInfo]:
        """Validators of `era` within the APY and commission ranges, one page.

        An empty list is returned when the era has no nominations yet; falling
        back to an earlier era is up to the caller.
        """
        commission_min = round(options.commission_min * constants.COMMISSION_STORE_SCALE, 6)
        commission_max = round(options.commission_max * constants.COMMISSION_STORE_SCALE, 6)

        statement = (
            select(Nomination, Validator)
            .join(Validator, Validator.id == Nomination.validator, isouter=True)
            .where(
                Nomination.era == era,
                Nomination.apy >= options.apy_min,
                Nomination.apy <= options.apy_max,
                Nomination.commission >= commission_min,
                Nomination.commission <= commission_max,
            )
        )
        if options.has_verified_identity:
            statement = statement.where(
                Validator.identity["isVerified"].as_boolean() == True  # noqa: E712
            )
        statement = (
            statement.order_by(Nomination.id)
            .offset(options.page * options.size)
            .limit(options.size)
        )

        with self.store.session() as session:
            rows = session.exec(statement).all()
            validators = self._build_validator_infos(session, rows)

        if options.only_program_members:
            members = self._get_program_members()
            validators = [v for v in validators if v.id in members]

        return validators

    def get_validator_info(
        self, stashes: Sequence[str], era: int
    ) -> List[schemas.ValidatorNominationInfo]:
        """Validators in `stashes` at `era`, with nominators expanded to records."""
        if not stashes:
            return []

        statement = (
            select(Nomination, Validator)
            .join(Validator, Validator.id == Nomination.validator, isouter=True)
            .where(Nomination.era == era, Nomination.validator.in_(list(stashes)))
            .order_by(Nomination.id)
        )

        with self.store.session() as session:
            rows = session.exec(statement).all()
            addresses = {
                address
                for nomination, _ in rows
                for address in map(join_normalizer.nominator_address, nomination.nominators or [])
                if address
            }
            nominators = self._get_nominators(session, addresses)
            return self._build_validator_infos(session, rows, nominators)

    def get_validator(self, stash: str) -> schemas.ValidatorNominationTrend:
        """Era by era history of a validator.

        Only the latest era carries nominator details; every other entry has
        its nominators unset.
        """
        with self.store.session() as session:
            validator = session.get(Validator, stash)
            if validator is None:
                raise NotFound(f"Failed to find validator with stash {stash}")

            nominations = session.exec(
                select(Nomination)
                .where(Nomination.validator == stash)
                .order_by(Nomination.id)
            ).all()
            if not nominations:
                raise NotFound(f"Failed to find nominations of validator {stash}")

            trend = join_normalizer.build_validator_trend(validator, list(nominations))

            latest = session.exec(
                select(Nomination)
                .where(Nomination.validator == stash)
                .order_by(Nomination.era.desc())
                .limit(1)
            ).first()
            if latest is None:
                return trend

            entries = latest.nominators or []
            records = self._get_nominators(
                session, filter(None, map(join_normalizer.nominator_address, entries))
            )

        nominators = [
            schemas.NominatorRef.model_validate(n)
            for n in join_normalizer.normalize_nominators(
                records.get(join_normalizer.nominator_address(e), e) for e in entries
            )
        ]
        for entry in trend.info:
            if entry.era == latest.era:
                entry.nominators = nominators
        return trend

    def get_validator_unclaimed_eras(self, stash: str) -> List[int]:
        with self.store.session() as session:
            info = session.get(UnclaimedEraInfo, stash)
        return list(info.eras or []) if info else []

    def get_validator_slashes(self, stash: str) -> List[schemas.ValidatorSlash]:
        return self.get_multiple_validators_slashes([stash])

    def get_multiple_validators_slashes(
        self, stashes: Sequence[str]
    ) -> List[schemas.ValidatorSlash]:
        if not stashes:
            return []
        with self.store.session() as session:
            slashes = session.exec(
                select(ValidatorSlash)
                .where(ValidatorSlash.address.in_(list(stashes)))
                .order_by(ValidatorSlash.id)
            ).all()
        return [
            schemas.ValidatorSlash.model_validate(join_normalizer.normalize_slash(s))
            for s in slashes
        ]

    def get_nominated_validators(
        self, stash: str
    ) -> List[schemas.ValidatorNominationInfo]:
        with self.store.session() as session:
            nominator = session.get(Nominator, stash)
        if nominator is None:
            raise NotFound(f"Cannot find nominator {stash}")

        return self.get_validator_info(nominator.targets or [], self.get_active_era())

    def _build_validator_infos(
        self,
        session: Session,
        rows: Sequence,
        nominators: Optional[Dict[str, Nominator]] = None,
    ) -> List[schemas.ValidatorNominationInfo]:
        validator_ids = list({nomination.validator for nomination, _ in rows})
        unclaimed = self._get_unclaimed_era_infos(session, validator_ids)
        slashes = self._get_slashes(session, validator_ids)

        result = []
        for nomination, validator in rows:
            expanded = None
            if nominators is not None:
                expanded = []
                for entry in nomination.nominators or []:
                    address = join_normalizer.nominator_address(entry)
                    if address:
                        expanded.append(nominators.get(address, entry))

            result.append(
                join_normalizer.build_validator_nomination_info(
                    nomination,
                    validator,
                    unclaimed=unclaimed.get(nomination.validator),
                    slashes=slashes.get(nomination.validator, []),
                    nominators=expanded,
                )
            )
        return result

    def _get_unclaimed_era_infos(
        self, session: Session, validator_ids: List[str]
    ) -> Dict[str, UnclaimedEraInfo]:
        if not validator_ids:
            return {}
        infos = session.exec(
            select(UnclaimedEraInfo).where(UnclaimedEraInfo.validator.in_(validator_ids))
        ).all()
        return {info.validator: info for info in infos}

    def _get_slashes(
        self, session: Session, validator_ids: List[str]
    ) -> Dict[str, List[ValidatorSlash]]:
        if not validator_ids:
            return {}
        slashes = session.exec(
            select(ValidatorSlash)
            .where(ValidatorSlash.address.in_(validator_ids))
            .order_by(ValidatorSlash.id)
        ).all()

        by_validator: Dict[str, List[ValidatorSlash]] = {}
        for slash in slashes:
            by_validator.setdefault(slash.address, []).append(slash)
        return by_validator

    def _get_nominators(self, session: Session, addresses) -> Dict[str, Nominator]:
        addresses = list(addresses)
        if not addresses:
            return {}
        records = session.exec(
            select(Nominator).where(Nominator.address.in_(addresses))
        ).all()
        return {n.address: n for n in records}

    def _get_program_members(self):
        if self.snapshot_cache is None:
            logger.warning("No snapshot cache configured, program member filter is empty")
            return set()
        return self.snapshot_cache.get_program_members(self.chain)
