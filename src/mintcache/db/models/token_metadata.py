"""Cached on-chain token metadata. One row per mint, never expires."""

from typing import Any

from sqlalchemy import JSON, BigInteger, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from mintcache.db.session import Base


class TokenMetadataCache(Base):
    __tablename__ = "token_metadata"

    mint: Mapped[str] = mapped_column(String(64), primary_key=True)
    # Attribute renamed: `metadata` is reserved on declarative classes
    metadata_json: Mapped[dict[str, Any]] = mapped_column("metadata", JSON().with_variant(JSONB(), "postgresql"))
    last_updated: Mapped[int] = mapped_column(BigInteger)  # Unix epoch seconds
