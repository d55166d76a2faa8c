"""Error hierarchy. Every failure the cache can surface derives from MintCacheError."""


class MintCacheError(Exception):
    """Base class for token lookup failures."""


class InvalidIdentifierError(MintCacheError):
    """The mint identifier is not a valid base58 public key."""


class AccountNotFoundError(MintCacheError):
    """The ledger has no account at the requested address."""

    def __init__(self, address: str) -> None:
        super().__init__(f"Account not found: {address}")
        self.address = address


class DecodeError(MintCacheError):
    """Account bytes do not match the expected layout."""


class ExternalServiceError(MintCacheError):
    """An upstream RPC or HTTP service failed or returned an error."""


class PriceParseError(MintCacheError):
    """The price service answered with a body that cannot be read as a price."""
