from enum import Enum

CHAIN_KUSAMA = "KSM"
CHAIN_POLKADOT = "DOT"
CHAIN_WESTEND = "WND"

SUPPORTED_CHAINS = [CHAIN_KUSAMA, CHAIN_POLKADOT, CHAIN_WESTEND]

# Path segment used by the HTTP layer for each chain
CHAIN_PATHS = {
    "ksm": CHAIN_KUSAMA,
    "dot": CHAIN_POLKADOT,
    "wnd": CHAIN_WESTEND,
}

CHAIN_NETWORK_NAMES = {
    CHAIN_KUSAMA: "Kusama",
    CHAIN_POLKADOT: "Polkadot",
    CHAIN_WESTEND: "Westend",
}

# Zero value of a hex encoded balance, used wherever a balance is absent
HEX_ZERO = "0x00"

# The era slot holds this until the poller has read the chain at least once
ERA_UNSET = 0

# Request-facing commission range is 0..1, stored commission is 0..100
COMMISSION_STORE_SCALE = 100.0

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 2000

MILLISECONDS_PER_SECOND = 1000
SECONDS_PER_DAY = 86400

# Snapshot cache keys
SNAPSHOT_ALL_VALIDATORS = "validDetailAll"
SNAPSHOT_ONE_KV = "onekv"
SNAPSHOT_ONE_KV_NOMINATORS = "onekvNominators"
SNAPSHOT_NOMINATORS = "nominators"

# Reward report generator
REWARD_REPORT_DEFAULT_START = "2020-01-01"
REWARD_REPORT_DEFAULT_CURRENCY = "USD"
REWARD_REPORT_NO_REWARDS = "No rewards found to parse"
REWARD_REPORT_TOO_EARLY = "is too early"
REWARD_REPORT_DAY_FORMAT = "%d-%m-%Y"

NOMINATION_TAG_LENGTH = 16

# Newsletter subscriptions are not chain scoped, they live in this chain's store
NEWSLETTER_CHAIN = CHAIN_KUSAMA


class NominationStrategy(int, Enum):
    DEFAULT = 0
    LOW_RISK = 1
    HIGH_APY = 2
