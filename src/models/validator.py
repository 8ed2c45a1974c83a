from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class Validator(SQLModel, table=True):
    __tablename__ = "validator"

    id: str = Field(primary_key=True)
    # {"display", "parent", "sub", "isVerified"}
    identity: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))
    # {"commission": int}
    status_change: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    # [{"era": int, "points": int}]
    staker_points: Optional[List[Dict[str, Any]]] = Field(
        default=None, sa_column=Column(JSON)
    )
    average_apy: Optional[float] = None
    blocked: Optional[bool] = None
