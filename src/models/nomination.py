from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel


class Nomination(SQLModel, table=True):
    """Exposure and nominators of one validator in one era."""

    __tablename__ = "nomination"
    __table_args__ = (UniqueConstraint("era", "validator"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    era: int = Field(index=True)
    validator: str = Field(index=True)
    # {"total": hex, "own": hex, "others": [{"who": str, "value": hex}]}
    exposure: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    commission: float = 0.0
    apy: float = 0.0
    # bare addresses (legacy rows) or {"address": ..., "balance": ...} objects
    nominators: List[Any] = Field(default_factory=list, sa_column=Column(JSON))
    total: Optional[str] = None
    self_stake: Optional[str] = None
