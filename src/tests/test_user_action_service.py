import string
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from core import constants
from core.errors import Duplicate, NotFound, StoreUnavailable, WriteFailed
from models import NewsletterSubscriber
from services.user_action_service import UserActionService, generate_tag


@pytest.fixture
def service(store, chain):
    return UserActionService(store, chain)


def test_generate_tag():
    tag = generate_tag()

    assert len(tag) == constants.NOMINATION_TAG_LENGTH
    assert set(tag) <= set(string.ascii_letters + string.digits)


def test_nomination_round_trip(service):
    tag = service.insert_nomination_action(
        "stash-1", ["v1", "v2"], 10**12, constants.NominationStrategy.LOW_RISK
    )

    service.insert_nomination_result(tag, "0xabc", ref_key="ref-1")
    record = service.get_nomination_record("stash-1")

    assert record.tag == tag
    assert record.validators == ["v1", "v2"]
    assert record.amount == "1000000000000"
    assert record.strategy == 1
    assert record.chain == constants.CHAIN_KUSAMA
    assert record.extrinsic_hash == "0xabc"
    assert record.ref_key == "ref-1"


def test_nomination_result_of_unknown_tag(service):
    with pytest.raises(NotFound):
        service.insert_nomination_result("missing", "0xabc")


def test_nomination_record_of_unknown_stash(service):
    with pytest.raises(NotFound):
        service.get_nomination_record("nobody")


def test_newsletter_subscription(service, session):
    service.subscribe_newsletter("someone@example.com")

    subscribers = session.exec(select(NewsletterSubscriber)).all()
    assert [s.email for s in subscribers] == ["someone@example.com"]


def test_duplicate_newsletter_subscription(service):
    service.subscribe_newsletter("someone@example.com")

    with pytest.raises(Duplicate):
        service.subscribe_newsletter("someone@example.com")


def test_failed_insert_is_write_failed(service):
    with patch(
        "sqlmodel.Session.commit",
        side_effect=OperationalError("INSERT", {}, Exception("disk full")),
    ):
        with pytest.raises(WriteFailed):
            service.insert_nomination_action("stash-1", ["v1"], 1)


def test_write_to_unavailable_store():
    store = MagicMock()
    store.session.side_effect = StoreUnavailable("down")

    with pytest.raises(StoreUnavailable):
        UserActionService(store, constants.CHAIN_KUSAMA).subscribe_newsletter("a@b.co")
