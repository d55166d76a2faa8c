from mintcache.db.repos.metadata_repo import TokenMetadataRepo
from mintcache.db.repos.price_repo import TokenPriceRepo

__all__ = ["TokenMetadataRepo", "TokenPriceRepo"]
