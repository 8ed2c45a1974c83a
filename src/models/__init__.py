from sqlmodel import SQLModel
from .nomination import Nomination
from .validator import Validator
from .unclaimed_era_info import UnclaimedEraInfo
from .validator_slash import ValidatorSlash
from .nominator import Nominator
from .stash_info import StashInfo
from .price import Price
from .chain_info import ChainInfo
from .staking_events import Commission, InactiveEvent, StalePayout
from .nomination_records import NominationRecord
from .newsletter import NewsletterSubscriber
