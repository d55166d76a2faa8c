from mintcache.db.models.token_metadata import TokenMetadataCache
from mintcache.db.models.token_price import TokenPrice

__all__ = ["TokenMetadataCache", "TokenPrice"]
