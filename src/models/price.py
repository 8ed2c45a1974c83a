from sqlmodel import Field, SQLModel


class Price(SQLModel, table=True):
    __tablename__ = "price"

    # UTC midnight, seconds
    timestamp: int = Field(primary_key=True)
    price: float = 0.0
