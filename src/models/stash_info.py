from typing import Optional

from sqlmodel import Field, SQLModel


class StashInfo(SQLModel, table=True):
    """One payout of a stash. Together the rows form the stash reward ledger."""

    __tablename__ = "stash_info"

    id: Optional[int] = Field(default=None, primary_key=True)
    stash: str = Field(index=True)
    era: Optional[int] = Field(default=None, index=True)
    amount: Optional[float] = None
    # milliseconds, ingested either as an integer or as a float
    timestamp: float = 0
