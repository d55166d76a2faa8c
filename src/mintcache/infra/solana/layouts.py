"""Binary layouts for the SPL Token mint account and the Metaplex metadata account."""

import struct

from pydantic import BaseModel
from solders.pubkey import Pubkey

from mintcache.exceptions import DecodeError

# SPL Token mint: COption<Pubkey> authority, u64 supply, u8 decimals, bool initialized, COption<Pubkey> freeze
MINT_LAYOUT = struct.Struct("<I32sQBBI32s")
MINT_SIZE = MINT_LAYOUT.size  # 82; Token-2022 mints carry extensions after this

# Metaplex Token Metadata: u8 key, update authority, mint, then borsh strings
METADATA_HEADER = struct.Struct("<B32s32s")
METADATA_V1_KEY = 4
BORSH_LEN = struct.Struct("<I")


class MintAccount(BaseModel):
    mint_authority: str | None
    supply: int
    decimals: int
    is_initialized: bool
    freeze_authority: str | None


class MetadataAccount(BaseModel):
    update_authority: str
    mint: str
    name: str
    symbol: str
    uri: str


def _coption_pubkey(tag: int, raw: bytes, field: str) -> str | None:
    if tag == 0:
        return None
    if tag == 1:
        return str(Pubkey.from_bytes(raw))
    raise DecodeError(f"Invalid COption tag {tag} for {field}")


def decode_mint(data: bytes) -> MintAccount:
    if len(data) < MINT_SIZE:
        raise DecodeError(f"Mint account too short: {len(data)} bytes (need {MINT_SIZE})")

    auth_tag, auth, supply, decimals, initialized, freeze_tag, freeze = MINT_LAYOUT.unpack_from(data)
    if initialized > 1:
        raise DecodeError(f"Invalid is_initialized flag: {initialized}")
    if not initialized:
        raise DecodeError("Mint account is not initialized")

    return MintAccount(
        mint_authority=_coption_pubkey(auth_tag, auth, "mint_authority"),
        supply=supply,
        decimals=decimals,
        is_initialized=True,
        freeze_authority=_coption_pubkey(freeze_tag, freeze, "freeze_authority"),
    )


def _read_string(data: bytes, offset: int, field: str) -> tuple[str, int]:
    if offset + BORSH_LEN.size > len(data):
        raise DecodeError(f"Metadata truncated before {field} length")
    (length,) = BORSH_LEN.unpack_from(data, offset)
    start = offset + BORSH_LEN.size
    end = start + length
    if end > len(data):
        raise DecodeError(f"Metadata {field} length {length} exceeds account size")
    try:
        value = data[start:end].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Metadata {field} is not valid UTF-8") from exc
    return value, end


def strip_padding(value: str) -> str:
    """On-chain strings are fixed-width and padded with NUL bytes."""
    return value.strip("\x00")


def decode_metadata(data: bytes) -> MetadataAccount:
    if len(data) < METADATA_HEADER.size:
        raise DecodeError(f"Metadata account too short: {len(data)} bytes")

    key, update_authority, mint = METADATA_HEADER.unpack_from(data)
    if key != METADATA_V1_KEY:
        raise DecodeError(f"Unexpected metadata account key: {key}")

    offset = METADATA_HEADER.size
    name, offset = _read_string(data, offset, "name")
    symbol, offset = _read_string(data, offset, "symbol")
    uri, offset = _read_string(data, offset, "uri")

    return MetadataAccount(
        update_authority=str(Pubkey.from_bytes(update_authority)),
        mint=str(Pubkey.from_bytes(mint)),
        name=strip_padding(name),
        symbol=strip_padding(symbol),
        uri=strip_padding(uri),
    )
