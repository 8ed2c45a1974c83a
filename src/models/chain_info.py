from typing import Optional

from sqlmodel import Field, SQLModel


class ChainInfo(SQLModel, table=True):
    __tablename__ = "chain_info"

    id: Optional[int] = Field(default=None, primary_key=True)
    active_era: int
