import base64
import struct
from unittest.mock import AsyncMock, MagicMock

import pytest
from solders.pubkey import Pubkey
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from mintcache.db.session import Base
from mintcache.infra.solana.layouts import MINT_LAYOUT
from mintcache.infra.solana.pda import find_metadata_address
import mintcache.db.models  # noqa: F401 — register all models

PUMP_MINT = "61V8vBaqAGMpgDQi4JcAwo1dmBGHsyhzodcPqnEVpump"


@pytest.fixture()
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest.fixture()
async def session(engine) -> AsyncSession:
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as sess:
        yield sess


def encode_mint(supply: int, decimals: int, authority: Pubkey | None = None, initialized: bool = True) -> bytes:
    auth_tag, auth = (1, bytes(authority)) if authority is not None else (0, bytes(32))
    return MINT_LAYOUT.pack(auth_tag, auth, supply, decimals, int(initialized), 0, bytes(32))


def _borsh(value: str, width: int) -> bytes:
    raw = value.encode("utf-8").ljust(width, b"\x00")
    return struct.pack("<I", len(raw)) + raw


def encode_metadata(mint: Pubkey, name: str, symbol: str, uri: str = "", key: int = 4) -> bytes:
    """Metaplex metadata account bytes with the on-chain fixed-width padding."""
    header = struct.pack("<B32s32s", key, bytes(Pubkey.default()), bytes(mint))
    body = _borsh(name, 32) + _borsh(symbol, 10) + _borsh(uri, 200)
    return header + body + struct.pack("<H", 0) + bytes(16)


def account_info(data: bytes | None) -> dict:
    """JSON-RPC getAccountInfo envelope for raw account bytes (None = missing account)."""
    value = None
    if data is not None:
        value = {
            "data": [base64.b64encode(data).decode(), "base64"],
            "executable": False,
            "lamports": 1461600,
            "owner": "TokenkegQfeZyiNwAJbNbGqPMKFn8Ws5nzykVsTYe8",
            "rentEpoch": 0,
        }
    return {"jsonrpc": "2.0", "id": 1, "result": {"context": {"slot": 300000000}, "value": value}}


@pytest.fixture()
def chain_accounts():
    """Raw account bytes keyed by address for PUMP_MINT and its metadata PDA."""
    mint = Pubkey.from_string(PUMP_MINT)
    return {
        PUMP_MINT: encode_mint(supply=999_969_040_000_000, decimals=6),
        str(find_metadata_address(mint)): encode_metadata(mint, "Pump Token", "PUMPT", "https://ipfs.io/ipfs/Qm"),
    }


@pytest.fixture()
def fake_rpc(chain_accounts):
    """Stand-in for SolanaRPCClient serving chain_accounts."""
    rpc = MagicMock()
    rpc.get_account_info = AsyncMock(side_effect=lambda address: chain_accounts.get(address))
    rpc.get_slot = AsyncMock(return_value=300000000)
    return rpc
