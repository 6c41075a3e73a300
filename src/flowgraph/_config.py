import os
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict


def load_environment(env: str):
    if env not in ('mainnet', 'testnet', 'local'):
        raise ValueError(f"Unknown environment: {env}")

    dotenv_path = os.path.abspath(f'env/.env.{env}')
    if os.path.exists(dotenv_path):
        load_dotenv(dotenv_path=dotenv_path)
    else:
        load_dotenv()


class MapperSettings(BaseSettings):
    LABEL_HEX_LENGTH: int = 4
    INCLUDE_SELECTED_POOL_NODES: bool = False
    DEFAULT_CHAIN_ID: int = 1

    LOG_LEVEL: str = "DEBUG"
    LOG_FILE: Optional[str] = None

    PORT: int = 9910
    WORKERS: int = 1

    model_config = SettingsConfigDict(
        extra='ignore',
        frozen=True
    )


def get_settings() -> MapperSettings:
    return MapperSettings()
