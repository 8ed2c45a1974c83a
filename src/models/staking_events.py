from typing import List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class Commission(SQLModel, table=True):
    __tablename__ = "commission"

    id: Optional[int] = Field(default=None, primary_key=True)
    address: str = Field(index=True)
    era: int = Field(index=True)
    commission_from: float
    commission_to: float


class StalePayout(SQLModel, table=True):
    __tablename__ = "stale_payouts"

    id: Optional[int] = Field(default=None, primary_key=True)
    address: str = Field(index=True)
    era: int = Field(index=True)
    unclaimed_payout_eras: List[int] = Field(
        default_factory=list, sa_column=Column(JSON)
    )


class InactiveEvent(SQLModel, table=True):
    __tablename__ = "inactive_events"

    id: Optional[int] = Field(default=None, primary_key=True)
    address: str = Field(index=True)
    era: int = Field(index=True)
