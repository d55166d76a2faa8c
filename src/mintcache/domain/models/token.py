"""Domain types for cached token lookups."""

from pydantic import BaseModel, ConfigDict, Field


class TokenMetadata(BaseModel):
    """Descriptive attributes of a mint, decoded from the mint and metadata accounts."""

    model_config = ConfigDict(frozen=True)

    mint: str
    name: str
    symbol: str
    decimals: int = Field(ge=0, le=255)
    supply: int = Field(ge=0, lt=2**64)
    uri: str = ""


class PriceRecord(BaseModel):
    """A spot price and the Unix time it was fetched."""

    mint: str
    price: float
    last_updated: int

    def age(self, now: float) -> float:
        return now - self.last_updated

    def is_fresh(self, now: float, max_age: int) -> bool:
        return self.age(now) <= max_age
