from .validator import (
    Balance,
    Exposure,
    ExposureOther,
    Identity,
    NominationInfo,
    NominatorRef,
    StakerPoint,
    StatusChange,
    ValidatorNominationInfo,
    ValidatorNominationTrend,
    ValidatorSlash,
    ValidatorSlashNominator,
)
from .rewards import CoinPrice, StashEraReward, StashRewards
from .nominator import NominationRecordInfo, NominatorNomination
from .staking_events import (
    StakingEvents,
    StashPayout,
    ValidatorCommission,
    ValidatorStalePayoutEvent,
)
from .api_requests import (
    NewsletterSubscriberRequest,
    NominationRequest,
    NominationResultRequest,
    ValidatorListOptions,
)
