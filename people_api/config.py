from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

import yaml
from dotenv import load_dotenv

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config" / "defaults.yaml"
load_dotenv()

DEFAULT_REFRESH_INTERVAL = 600.0

_DURATION_UNITS: Dict[str, float] = {
    "nsec": 1e-9, "ns": 1e-9,
    "usec": 1e-6, "us": 1e-6,
    "msec": 1e-3, "ms": 1e-3,
    "seconds": 1, "second": 1, "sec": 1, "s": 1,
    "minutes": 60, "minute": 60, "min": 60, "m": 60,
    "hours": 3600, "hour": 3600, "hr": 3600, "h": 3600,
    "days": 86400, "day": 86400, "d": 86400,
    "weeks": 604800, "week": 604800, "w": 604800,
    "months": 2630016, "month": 2630016, "M": 2630016,
    "years": 31557600, "year": 31557600, "y": 31557600,
}
_DURATION_PART = re.compile(r"\s*(\d+)\s*([A-Za-z]+)")


def parse_duration(value: Union[str, int, float, None]) -> Optional[float]:
    """Parse a human readable duration such as ``10m`` or ``1h 30m`` into seconds.

    Bare numbers are taken as seconds. Returns ``None`` when the value cannot be
    parsed.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if value > 0 else None

    text = value.strip()
    if not text:
        return None
    try:
        seconds = float(text)
    except ValueError:
        pass
    else:
        return seconds if seconds > 0 else None

    total = 0.0
    position = 0
    while position < len(text):
        match = _DURATION_PART.match(text, position)
        if not match:
            return None
        amount, unit = match.groups()
        multiplier = _DURATION_UNITS.get(unit)
        if multiplier is None:
            return None
        total += int(amount) * multiplier
        position = match.end()
        while position < len(text) and text[position].isspace():
            position += 1
    return total if total > 0 else None


def _bool_from_env(value: str | None) -> Optional[bool]:
    if value is None:
        return None
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return None


def _merge_dicts(base: Dict, overrides: Mapping) -> Dict:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), Mapping):
            merged[key] = _merge_dicts(base[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> Dict:
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text()) or {}


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 9090


@dataclass
class SourceConfig:
    local_path: str = "assets/people.json"
    remote_url: str = "https://raw.githubusercontent.com/cncf/people/refs/heads/main/people.json"


@dataclass
class RefreshConfig:
    interval: float = DEFAULT_REFRESH_INTERVAL
    timeout: float = 5.0
    max_connections: int = 10
    enabled: bool = True


@dataclass
class LoggingConfig:
    level: str = "INFO"
    json: bool = True


@dataclass
class AppConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    sources: SourceConfig = field(default_factory=SourceConfig)
    refresh: RefreshConfig = field(default_factory=RefreshConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(*, config_path: str | None = None, env: Mapping[str, str] | None = None) -> AppConfig:
    env = dict(os.environ if env is None else env)
    data = _load_yaml(_DEFAULT_CONFIG_PATH)

    explicit_path = config_path or env.get("PEOPLE_API_CONFIG_PATH")
    if explicit_path:
        data = _merge_dicts(data, _load_yaml(Path(explicit_path)))

    server_data = dict(data.get("server") or {})
    port_override = env.get("PORT")
    if port_override:
        server_data["port"] = port_override
    # Invalid ports fail here, before anything tries to bind.
    server_data["port"] = int(server_data.get("port", ServerConfig.port))

    source_data = dict(data.get("sources") or {})
    for key, env_name in (("local_path", "LOCAL_PATH"), ("remote_url", "REMOTE_URL")):
        if env.get(env_name):
            source_data[key] = env[env_name]

    refresh_data = dict(data.get("refresh") or {})
    if env.get("REFRESH_INTERVAL"):
        refresh_data["interval"] = env["REFRESH_INTERVAL"]
    refresh_data["interval"] = parse_duration(refresh_data.get("interval")) or DEFAULT_REFRESH_INTERVAL
    enabled_override = _bool_from_env(env.get("REFRESH_ENABLED"))
    if enabled_override is not None:
        refresh_data["enabled"] = enabled_override

    logging_data = dict(data.get("logging") or {})
    level_override = env.get("LOG_LEVEL")
    if level_override:
        logging_data["level"] = level_override
    json_override = _bool_from_env(env.get("LOG_JSON"))
    if json_override is not None:
        logging_data["json"] = json_override

    return AppConfig(
        server=ServerConfig(**server_data),
        sources=SourceConfig(**source_data),
        refresh=RefreshConfig(**refresh_data),
        logging=LoggingConfig(**logging_data) if logging_data else LoggingConfig(),
    )


app_config = load_config()
