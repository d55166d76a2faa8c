from typing import Annotated

from fastapi import APIRouter, Depends

from mintcache.api.deps import get_token_service
from mintcache.api.schemas.tokens import PriceResponse, TokenMetadataResponse
from mintcache.services.token_service import TokenService

router = APIRouter(prefix="/api/tokens", tags=["tokens"])

ServiceDep = Annotated[TokenService, Depends(get_token_service)]


@router.get("/{mint}/metadata", response_model=TokenMetadataResponse)
async def get_metadata(mint: str, service: ServiceDep) -> TokenMetadataResponse:
    metadata = await service.get_metadata(mint)
    return TokenMetadataResponse(**metadata.model_dump())


@router.get("/{mint}/price", response_model=PriceResponse)
async def get_price(mint: str, service: ServiceDep) -> PriceResponse:
    """Spot price, served from cache while younger than the freshness window."""
    record = await service.get_price_record(mint)
    return PriceResponse(**record.model_dump())
