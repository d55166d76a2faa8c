from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "mintcache"
    db_url: str = ""  # Full DSN, overrides the db_* parts when set
    solana_rpc_url: str = "https://api.mainnet-beta.solana.com"
    solana_ws_url: str = "wss://api.mainnet-beta.solana.com"  # Carried for subscribers, not used by the cache
    price_api_url: str = "https://api.jup.ag/price/v2"
    price_cache_seconds: int = 60
    rpc_max_attempts: int = 3
    http_rate_per_second: float = 10.0
    http_timeout: float = 30.0
    health_check_interval: float = 30.0
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    log_level: str = "INFO"
    debug: bool = False

    @property
    def database_url(self) -> str:
        if self.db_url:
            return self.db_url
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    class Config:
        env_file = ".env"
        env_prefix = "MINTCACHE_"


settings = Settings()
