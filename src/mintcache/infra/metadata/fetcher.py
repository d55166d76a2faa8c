"""MetadataFetcher — resolves a mint to name/symbol/decimals/supply from chain state."""

import logging

from mintcache.domain.models.token import TokenMetadata
from mintcache.exceptions import AccountNotFoundError
from mintcache.infra.solana.layouts import decode_metadata, decode_mint
from mintcache.infra.solana.pda import find_metadata_address, parse_pubkey
from mintcache.infra.solana.rpc_client import SolanaRPCClient

logger = logging.getLogger(__name__)


class MetadataFetcher:
    def __init__(self, rpc: SolanaRPCClient) -> None:
        self._rpc = rpc

    async def fetch(self, mint: str) -> TokenMetadata:
        """Read the mint account and its metadata PDA.

        Raises InvalidIdentifierError for a malformed mint, AccountNotFoundError
        when either account is missing and DecodeError on unexpected bytes.
        """
        mint_pubkey = parse_pubkey(mint)
        address = str(mint_pubkey)

        mint_data = await self._rpc.get_account_info(address)
        if mint_data is None:
            raise AccountNotFoundError(address)
        mint_account = decode_mint(mint_data)

        metadata_address = str(find_metadata_address(mint_pubkey))
        metadata_data = await self._rpc.get_account_info(metadata_address)
        if metadata_data is None:
            raise AccountNotFoundError(metadata_address)
        metadata_account = decode_metadata(metadata_data)

        logger.info(
            "Fetched metadata for %s: %s (%s), decimals=%d",
            address, metadata_account.name, metadata_account.symbol, mint_account.decimals,
        )
        return TokenMetadata(
            mint=address,
            name=metadata_account.name,
            symbol=metadata_account.symbol,
            decimals=mint_account.decimals,
            supply=mint_account.supply,
            uri=metadata_account.uri,
        )
