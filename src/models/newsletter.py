from typing import Optional

from sqlmodel import Field, SQLModel


class NewsletterSubscriber(SQLModel, table=True):
    __tablename__ = "newsletter"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    timestamp: int
