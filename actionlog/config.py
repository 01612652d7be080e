"""
Engine configuration.

Environment Variables:
    ACTIONLOG_PATH_DELIMITER: Separator of qualified action names - default: "."
    ACTIONLOG_INITIAL_ACTION: Name of the synthetic first action of a run - default: "Initial State"
    ACTIONLOG_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    ACTIONLOG_LOG_FORMAT: Log format (json, text) - default: json
    METRICS_ENABLED: Enable metrics server (true/false) - default: false
    METRICS_PORT: HTTP port for /metrics endpoint - default: 8080
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_PATH_DELIMITER = "."
DEFAULT_INITIAL_ACTION = "Initial State"
DEFAULT_METRICS_PORT = 8080


def _env_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    val = env.get(key)
    if val is None or val == "":
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    val = env.get(key)
    if not val:
        return default
    try:
        parsed = int(val)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@dataclass(frozen=True)
class EngineConfig:
    """
    Immutable engine settings.

    Fields:
        path_delimiter: Separator between segments of a qualified action name
        initial_action_name: Name given to the synthetic "initial state" node
        log_level: Root log level
        log_format: "json" or "text"
        metrics_enabled: Start the Prometheus endpoint
        metrics_port: Port of the Prometheus endpoint
    """
    path_delimiter: str = DEFAULT_PATH_DELIMITER
    initial_action_name: str = DEFAULT_INITIAL_ACTION
    log_level: str = "INFO"
    log_format: str = "json"
    metrics_enabled: bool = False
    metrics_port: int = DEFAULT_METRICS_PORT

    @staticmethod
    def from_env(env: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """
        Build config from environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)
        """
        env = os.environ if env is None else env
        return EngineConfig(
            path_delimiter=env.get("ACTIONLOG_PATH_DELIMITER") or DEFAULT_PATH_DELIMITER,
            initial_action_name=env.get("ACTIONLOG_INITIAL_ACTION") or DEFAULT_INITIAL_ACTION,
            log_level=(env.get("ACTIONLOG_LOG_LEVEL") or "INFO").upper(),
            log_format=(env.get("ACTIONLOG_LOG_FORMAT") or "json").lower(),
            metrics_enabled=_env_bool(env, "METRICS_ENABLED", False),
            metrics_port=_env_int(env, "METRICS_PORT", DEFAULT_METRICS_PORT),
        )


DEFAULT_CONFIG = EngineConfig()
