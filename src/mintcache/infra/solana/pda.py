from solders.pubkey import Pubkey

from mintcache.exceptions import InvalidIdentifierError

TOKEN_METADATA_PROGRAM_ID = Pubkey.from_string("metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s")
METADATA_SEED = b"metadata"


def parse_pubkey(address: str) -> Pubkey:
    """Parse a base58 address, raising InvalidIdentifierError on malformed input."""
    try:
        return Pubkey.from_string(address)
    except ValueError as exc:
        raise InvalidIdentifierError(f"Invalid mint identifier: {address!r}") from exc


def find_metadata_address(mint: Pubkey) -> Pubkey:
    """Derive the Metaplex metadata PDA for a mint."""
    pda, _bump = Pubkey.find_program_address(
        [METADATA_SEED, bytes(TOKEN_METADATA_PROGRAM_ID), bytes(mint)],
        TOKEN_METADATA_PROGRAM_ID,
    )
    return pda
