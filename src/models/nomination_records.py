from typing import List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class NominationRecord(SQLModel, table=True):
    """A nomination submitted through the API, completed once it is on chain."""

    __tablename__ = "nomination_records"

    id: Optional[int] = Field(default=None, primary_key=True)
    stash: str = Field(index=True)
    validators: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    amount: str
    strategy: int = 0
    tag: str = Field(unique=True, index=True)
    chain: str
    extrinsic_hash: Optional[str] = None
    ref_key: Optional[str] = None
