"""
Runtime configuration, read from the environment (and a .env file if present)
"""
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_CONFLUX_RPC = "https://test.confluxrpc.com"

_settings: Optional["Settings"] = None


class Settings(BaseModel):
    """Service settings"""
    conflux_rpc: str = DEFAULT_CONFLUX_RPC
    rpc_timeout: float = 30.0  # seconds, enforced by the HTTP provider
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            conflux_rpc=os.getenv("CONFLUX_RPC", DEFAULT_CONFLUX_RPC),
            rpc_timeout=float(os.getenv("RPC_TIMEOUT", "30")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            api_host=os.getenv("API_HOST", "0.0.0.0"),
            api_port=int(os.getenv("API_PORT", "8000")),
        )


def get_settings() -> Settings:
    """Get or load settings"""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
