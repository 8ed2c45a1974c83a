import logging
import secrets
import string
from datetime import datetime, timezone
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import select

from core import constants
from core.db import RecordStore
from core.errors import Duplicate, NotFound, WriteFailed
from models import NewsletterSubscriber, NominationRecord

logger = logging.getLogger(__name__)


def generate_tag(length=constants.NOMINATION_TAG_LENGTH):
    characters = string.ascii_letters + string.digits
    return "".join(secrets.choice(characters) for _ in range(length))


class UserActionService:
    def __init__(self, store: RecordStore, chain: str):
        self.store = store
        self.chain = chain

    def insert_nomination_action(
        self,
        stash: str,
        validators: List[str],
        amount: int,
        strategy: constants.NominationStrategy = constants.NominationStrategy.DEFAULT,
    ) -> str:
        """Record a nomination the user is about to submit and return its tag."""
        tag = generate_tag()
        record = NominationRecord(
            stash=stash,
            validators=list(validators),
            amount=str(amount),
            strategy=int(strategy),
            tag=tag,
            chain=self.chain,
        )
        with self.store.session() as session:
            try:
                session.add(record)
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.error("Failed to insert nomination of %s: %s", stash, e, exc_info=True)
                raise WriteFailed(f"Failed to insert nomination of {stash}") from e

        logger.info("Nomination of %s recorded with tag %s", stash, tag)
        return tag

    def insert_nomination_result(self, tag: str, extrinsic_hash: str, ref_key=None) -> None:
        with self.store.session() as session:
            record = session.exec(
                select(NominationRecord).where(NominationRecord.tag == tag)
            ).first()
            if record is None:
                raise NotFound(f"Cannot find nomination with tag {tag}")

            record.extrinsic_hash = extrinsic_hash
            record.ref_key = ref_key
            try:
                session.add(record)
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.error("Failed to update nomination %s: %s", tag, e, exc_info=True)
                raise WriteFailed(f"Failed to update nomination {tag}") from e

    def get_nomination_record(self, stash: str) -> NominationRecord:
        with self.store.session() as session:
            record = session.exec(
                select(NominationRecord)
                .where(NominationRecord.stash == stash)
                .order_by(NominationRecord.id.desc())
            ).first()
        if record is None:
            raise NotFound(f"Cannot find nomination of {stash}")
        return record

    def subscribe_newsletter(self, email: str) -> None:
        subscriber = NewsletterSubscriber(
            email=email, timestamp=int(datetime.now(timezone.utc).timestamp())
        )
        with self.store.session() as session:
            try:
                session.add(subscriber)
                session.commit()
            except IntegrityError as e:
                session.rollback()
                raise Duplicate(f"{email} is already subscribed") from e
            except SQLAlchemyError as e:
                session.rollback()
                logger.error("Failed to subscribe %s: %s", email, e, exc_info=True)
                raise WriteFailed(f"Failed to subscribe {email}") from e
