"""
Configuration loader for the PIM client
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError
import logging

logger = logging.getLogger(__name__)

ENV_PREFIX = "PIM_"


class ClientConfig(BaseModel):
    """PIM API client configuration"""

    base_url: str = Field(min_length=1)
    access_token: Optional[str] = None
    timeout_seconds: float = Field(default=20.0, gt=0)
    user_agent: str = "pim-families-client/0.1"
    use_mock: bool = False


def _config_from_env() -> Dict[str, Any]:
    mapping = {
        "base_url": "API_URL",
        "access_token": "ACCESS_TOKEN",
        "timeout_seconds": "TIMEOUT_SECONDS",
        "user_agent": "USER_AGENT",
        "use_mock": "USE_MOCK",
    }
    data: Dict[str, Any] = {}
    for field_name, env_name in mapping.items():
        value = os.getenv(ENV_PREFIX + env_name)
        if value is not None and value != "":
            data[field_name] = value
    if "use_mock" in data:
        data["use_mock"] = str(data["use_mock"]).lower() in ("1", "true", "yes")
    return data


def load_client_config(config_path: Optional[Path] = None) -> ClientConfig:
    """
    Load PIM client configuration

    Args:
        config_path: Path to a YAML config file. When omitted, the configuration
            is read from PIM_* environment variables (a .env file is honoured).

    Returns:
        Validated ClientConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        load_dotenv()
        config_data = _config_from_env()
        source = "environment"
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
        source = str(config_path)

    try:
        config = ClientConfig(**config_data)
        logger.info(f"Successfully loaded PIM client config from {source}")
        return config
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise
