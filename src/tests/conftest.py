import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from core import constants
from core.config import Settings
from core.db import RecordStore
from core.era_cache import CurrentEraCache
from core.snapshot_cache import SnapshotCache
from models import (
    ChainInfo,
    Nomination,
    Nominator,
    UnclaimedEraInfo,
    Validator,
    ValidatorSlash,
)
from services.price_cache import DailyPriceCache

ALICE = "alice-validator"
BOB = "bob-validator"
CAROL = "carol-validator"
DAVE = "dave-nominator"
EVE = "eve-nominator"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        SQLALCHEMY_DATABASE_URI="sqlite://",
        ERA_POLL_CHAINS=[],
        ERA_POLL_INTERVAL_SECONDS=0.01,
        SNAPSHOT_CACHE_DIR=str(tmp_path / "cache"),
        STAKING_REWARDS_COLLECTOR_DIR=str(tmp_path),
        LOG_DIR=str(tmp_path / "logs"),
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def store(settings, engine):
    store = RecordStore(settings, "kusama", engine=engine)
    store.create_tables()
    return store


@pytest.fixture
def session(engine, store):
    with Session(engine) as session:
        yield session


@pytest.fixture
def era_cache():
    return CurrentEraCache()


@pytest.fixture
def snapshot_cache(settings, tmp_path):
    (tmp_path / "cache").mkdir(exist_ok=True)
    return SnapshotCache(settings.SNAPSHOT_CACHE_DIR)


@pytest.fixture
def price_cache():
    return DailyPriceCache(maxsize=16, ttl=60)


def make_nomination(validator, era, apy=0.1, commission=5.0, nominators=None, **kwargs):
    return Nomination(
        era=era,
        validator=validator,
        exposure=kwargs.pop(
            "exposure",
            {"total": "0x64", "own": "0x0a", "others": [{"who": DAVE, "value": "0x5a"}]},
        ),
        commission=commission,
        apy=apy,
        nominators=[DAVE] if nominators is None else nominators,
        **kwargs,
    )


@pytest.fixture
def seeded_store(store, session):
    """Three validators in era 100, a verified one, one with unclaimed eras
    and a slash, one without validator metadata."""
    session.add_all(
        [
            Validator(
                id=ALICE,
                identity={"display": "Alice", "parent": "", "sub": "", "isVerified": True},
                status_change={"commission": 5},
                staker_points=[{"era": 99, "points": 20}, {"era": 100, "points": 40}],
                average_apy=0.12,
                blocked=False,
            ),
            Validator(
                id=BOB,
                identity={"display": "Bob", "parent": "", "sub": "", "isVerified": False},
                status_change={"commission": 10},
            ),
            make_nomination(ALICE, 99, apy=0.11, nominators=[DAVE]),
            make_nomination(
                ALICE,
                100,
                apy=0.12,
                commission=5.0,
                nominators=[DAVE, {"address": EVE, "balance": {"lockedBalance": "0x10", "freeBalance": "0x20"}}],
                total="0x64",
                self_stake="0x0a",
            ),
            make_nomination(BOB, 100, apy=0.5, commission=10.0, nominators=[]),
            make_nomination(CAROL, 100, apy=0.2, commission=20.0, nominators=[EVE]),
            UnclaimedEraInfo(validator=ALICE, eras=[10, 12]),
            ValidatorSlash(
                address=ALICE, era=90, total="0x05", others=[{"address": DAVE, "value": "0x03"}]
            ),
            Nominator(
                address=DAVE,
                balance={"lockedBalance": "0x0100", "freeBalance": "0x0200"},
                targets=[ALICE, BOB],
            ),
            ChainInfo(active_era=100),
        ]
    )
    session.commit()
    return store


@pytest.fixture
def chain():
    return constants.CHAIN_KUSAMA
