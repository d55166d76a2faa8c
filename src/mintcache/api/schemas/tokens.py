from pydantic import BaseModel


class TokenMetadataResponse(BaseModel):
    mint: str
    name: str
    symbol: str
    decimals: int
    supply: int
    uri: str = ""


class PriceResponse(BaseModel):
    mint: str
    price: float
    last_updated: int
