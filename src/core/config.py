import json
from functools import lru_cache
from typing import Annotated, Dict, List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from core import constants


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True, env_file="../.env", extra="allow"
    )

    ENVIRONMENT_NAME: str = "Development"

    @property
    def is_production(self):
        return self.ENVIRONMENT_NAME == "Production"

    PROJECT_NAME: str = "staking-insight"
    API_V1_STR: str = "/api/v1"
    # BACKEND_CORS_ORIGINS is a comma separated or JSON-formatted list of origins
    # e.g: '["http://localhost", "http://localhost:3000"]'
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        elif isinstance(v, list):
            return v
        raise ValueError(v)

    # Record store
    DB_HOST: str = "127.0.0.1"
    DB_PORT: int = 5432
    DB_HAS_CREDENTIAL: bool = False
    DB_USERNAME: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_HAS_TLS: bool = False
    DB_CA_FILE: Optional[str] = None
    DB_CERT_FILE: Optional[str] = None
    DB_CERT_KEY_FILE: Optional[str] = None
    DB_ALLOW_INVALID_CERTIFICATES: bool = False
    DB_STATEMENT_TIMEOUT_MS: int = 30_000
    # Overrides the URI assembled from DB_* for every chain when set
    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    KUSAMA_DB_NAME: str = "kusama"
    POLKADOT_DB_NAME: str = "polkadot"
    WESTEND_DB_NAME: str = "westend"

    @field_validator("DB_CERT_KEY_FILE", "DB_CERT_FILE", "DB_CA_FILE", mode="before")
    def empty_path_as_none(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # Era poller
    ERA_POLL_INTERVAL_SECONDS: float = 600
    ERA_POLL_CHAINS: Annotated[List[str], NoDecode] = [
        constants.CHAIN_KUSAMA,
        constants.CHAIN_POLKADOT,
    ]

    @field_validator("ERA_POLL_CHAINS", mode="before")
    def assemble_poll_chains(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip().upper() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        return v

    # Daily price cache
    PRICE_CACHE_MAX_DAYS: int = 4096
    PRICE_CACHE_TTL_SECONDS: float = 60 * 60 * 6

    # Precomputed snapshots (all validators / 1kv)
    SNAPSHOT_CACHE_DIR: str = "./cache"

    # Reward report generator
    STAKING_REWARDS_COLLECTOR_DIR: str = "./staking-rewards-collector"
    REWARD_REPORT_COMMAND: str = "node src/index.js"
    REWARD_REPORT_TIMEOUT_SECONDS: float = 120

    # Seq log
    SEQ_SERVER_URL: Optional[str] = None
    SEQ_SERVER_API_KEY: Optional[str] = None
    LOG_DIR: str = "./logs"

    @property
    def chain_db_names(self) -> Dict[str, str]:
        return {
            constants.CHAIN_KUSAMA: self.KUSAMA_DB_NAME,
            constants.CHAIN_POLKADOT: self.POLKADOT_DB_NAME,
            constants.CHAIN_WESTEND: self.WESTEND_DB_NAME,
        }

    def db_name_for(self, chain: str) -> str:
        try:
            return self.chain_db_names[chain]
        except KeyError:
            raise ValueError(f"Unsupported chain: {chain}")


@lru_cache
def get_settings() -> Settings:
    return Settings()
