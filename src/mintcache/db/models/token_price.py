"""Cached spot price for a mint. Valid for the configured freshness window."""

from sqlalchemy import BigInteger, Double, String
from sqlalchemy.orm import Mapped, mapped_column

from mintcache.db.session import Base


class TokenPrice(Base):
    __tablename__ = "token_prices"

    mint: Mapped[str] = mapped_column(String(64), primary_key=True)
    price: Mapped[float] = mapped_column(Double)
    last_updated: Mapped[int] = mapped_column(BigInteger, index=True)  # Unix epoch seconds
