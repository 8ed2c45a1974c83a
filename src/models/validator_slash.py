from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class ValidatorSlash(SQLModel, table=True):
    __tablename__ = "validator_slash"

    id: Optional[int] = Field(default=None, primary_key=True)
    address: str = Field(index=True)
    era: int = Field(index=True)
    total: str = "0x00"
    # [{"address": str, "value": hex}]
    others: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
