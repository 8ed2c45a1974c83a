from typing import List

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class UnclaimedEraInfo(SQLModel, table=True):
    __tablename__ = "unclaimed_era_info"

    validator: str = Field(primary_key=True)
    eras: List[int] = Field(default_factory=list, sa_column=Column(JSON))
