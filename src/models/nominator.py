from typing import Any, Dict, List

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class Nominator(SQLModel, table=True):
    __tablename__ = "nominator"

    address: str = Field(primary_key=True)
    # {"lockedBalance": hex, "freeBalance": hex}
    balance: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    targets: List[str] = Field(default_factory=list, sa_column=Column(JSON))
