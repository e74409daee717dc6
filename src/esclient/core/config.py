from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from esclient.core.errors import ConfigError

# Load environment variables from .env if present
load_dotenv()


def _load_yaml_overlay() -> Dict[str, Any]:
    """Read the optional YAML file named by ES_CONFIG_PATH."""
    cfg_path = os.getenv("ES_CONFIG_PATH")
    if not cfg_path:
        return {}
    path = Path(cfg_path)
    if not path.exists():
        return {}
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"{cfg_path}: invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{cfg_path}: expected a mapping, got {type(data).__name__}")
    return data


class Settings(BaseModel):
    url: str = "http://localhost:9200"
    timeout: float = 30.0
    audit_log_path: Optional[str] = None
    service_name: str = "esclient"
    otlp_endpoint: str = "http://localhost:4318"


def load_settings() -> Settings:
    """Build settings from defaults, then the YAML overlay, then the environment."""
    values: Dict[str, Any] = {}
    overlay = _load_yaml_overlay()
    for key in ("url", "timeout", "audit_log_path", "service_name"):
        if overlay.get(key) is not None:
            values[key] = overlay[key]

    env_map = {
        "url": "ES_URL",
        "timeout": "ES_TIMEOUT",
        "audit_log_path": "ES_AUDIT_LOG_PATH",
        "service_name": "ES_SERVICE_NAME",
        "otlp_endpoint": "OTEL_EXPORTER_OTLP_ENDPOINT",
    }
    for key, env_name in env_map.items():
        value = os.getenv(env_name)
        if value:
            values[key] = value
    try:
        return Settings(**values)
    except ValidationError as e:
        problems = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
        raise ConfigError(f"Invalid settings: {problems}") from e


@lru_cache
def get_settings() -> Settings:
    return load_settings()
