from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Directory holding db.json; DB_DIR is read too for existing deployments
    data_dir: str = Field(default=".", validation_alias=AliasChoices("tictactoe_data_dir", "db_dir"))
    host: str = "0.0.0.0"  # noqa: S104
    port: int = Field(default=3000, validation_alias=AliasChoices("tictactoe_port", "port"))
    forwarded_allow_ips: str = "127.0.0.1"  # Proxies trusted for X-Forwarded-For, which rate limiting keys on
    debug: bool = False
    cors_origins: list[str] = []
    static_path: str | None = None  # Directory with the web client, mounted at / when set
    login_code_validity_seconds: float = 15
    login_code_reserve_seconds: float = 5  # Cool-down before a used or expired code can be issued again
    login_code_sweep_interval_seconds: float = 0.5
    login_code_max_attempts: int | None = None  # None retries until a free code is found
    login_rate_limit: int = 5  # Code redemption attempts allowed per window and client address
    login_rate_window_seconds: float = 60
    rate_limit_prune_interval_seconds: float = 30

    model_config = {
        "env_file": [".env"],
        "env_prefix": "TICTACTOE_",
        "extra": "ignore",
        "populate_by_name": True,
    }
