from sqlalchemy import Column, BigInteger, Float, Numeric, Text
from .base import BaseModel


class Destination(BaseModel):
    __tablename__ = "travel_destinations"
    __table_args__ = {"sqlite_autoincrement": True}  # ids are never reused

    rank = Column(BigInteger, nullable=False)
    destination = Column(Text, nullable=False)
    country = Column(Text, nullable=False)
    latitude = Column(Numeric(10, 8).with_variant(Float(), "sqlite"), nullable=False)
    longitude = Column(Numeric(11, 8).with_variant(Float(), "sqlite"), nullable=False)
    reason = Column(Text, nullable=False, default="", server_default="")
    budget = Column(Text, nullable=False, default="moderate", server_default="moderate")
    timeline = Column(Text, nullable=False, default="someday", server_default="someday")
    image_url = Column(Text)

    def __repr__(self):
        return f"<Destination #{self.rank} {self.destination}, {self.country}>"
