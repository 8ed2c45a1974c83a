class StakingInsightError(Exception):
    """Base class of every error surfaced by the services."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message or self.__class__.__name__


class StoreUnavailable(StakingInsightError):
    """The record store is not connected or failed to answer."""


class NotFound(StakingInsightError):
    """Zero rows where exactly one was expected."""


class Duplicate(StakingInsightError):
    """A write violated a uniqueness constraint."""


class WriteFailed(StakingInsightError):
    pass


class SubprocessFailed(StakingInsightError):
    """The reward report generator failed or produced unusable output."""


class ReportDateTooEarly(SubprocessFailed):
    pass


class NoRewardsFound(NotFound):
    """The reward report generator found nothing to report for the address.

    This is an expected empty result, not a failure of the generator.
    """
