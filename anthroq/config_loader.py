"""Configuration loading from YAML files with environment variable support."""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import dotenv_values

from .core.exceptions import ConfigurationError

logger = logging.getLogger("anthroq")

# Default path to the config file (relative to project root)
DEFAULT_CONFIG_PATH = "configs/config.yaml"

DEFAULT_PROVIDER = "groq"
DEFAULT_DOWNSTREAM_URL = "https://api.groq.com/openai/v1/chat/completions"
DEFAULT_DOWNSTREAM_MODEL = "moonshotai/kimi-k2-instruct"
DEFAULT_MAX_OUTPUT_TOKENS = 16384
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TIMEOUT = 60.0

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


@dataclass(frozen=True)
class ProxySettings:
    """Construction-time settings for the proxy.

    Attributes:
        provider: Label prefixed to the model name in responses.
        downstream_url: Chat completion endpoint receiving the translated call.
        downstream_model: Model id sent downstream, whatever the caller asked for.
        max_output_tokens: Hard ceiling applied to the caller's max_tokens.
        default_temperature: Temperature used when the caller gives none.
        request_timeout: Downstream timeout in seconds, None to disable.
        expose_diagnostics: Include received headers and stack traces in
            error bodies.
        host: Bind address for the server.
        port: Bind port for the server.
        log_level: Level name for the proxy logger.
    """

    provider: str = DEFAULT_PROVIDER
    downstream_url: str = DEFAULT_DOWNSTREAM_URL
    downstream_model: str = DEFAULT_DOWNSTREAM_MODEL
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS
    default_temperature: float = DEFAULT_TEMPERATURE
    request_timeout: Optional[float] = DEFAULT_TIMEOUT
    expose_diagnostics: bool = True
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    @property
    def response_model(self) -> str:
        """Model name reported back to the caller."""
        return f"{self.provider}/{self.downstream_model}"


def resolve_config_path(path: str) -> Path:
    """Resolve config path relative to project root if needed."""
    if Path(path).is_absolute():
        return Path(path)
    project_root = Path(__file__).parent.parent
    return project_root / path


def resolve_env_path(config_path: Path, env_path: str | None = None) -> Path:
    """Resolve the env file sitting next to a config file."""
    if env_path:
        return resolve_config_path(env_path)
    return config_path.with_name(".env")


def load_env_values(env_path: Path) -> dict[str, str]:
    """Load environment values from a .env file without mutating os.environ."""
    if not env_path.exists():
        return {}
    raw_values = dotenv_values(env_path)
    return {key: value for key, value in raw_values.items() if value is not None}


def load_config(
    path: str | None = None,
    env_path: str | None = None,
    substitute_env: bool = True,
) -> dict:
    """Load configuration from a YAML file.

    Args:
        path: Path to the config file. Defaults to ANTHROQ_CONFIG, or
              configs/config.yaml in the project root.
        env_path: Optional .env path override for env substitution.
        substitute_env: Whether to substitute environment variables in the config.

    Returns:
        Parsed configuration dictionary. Empty when no path was given and
        the default file does not exist.

    Raises:
        ConfigurationError: If an explicitly requested file does not exist.
    """
    explicit = path is not None or "ANTHROQ_CONFIG" in os.environ
    if path is None:
        path = os.getenv("ANTHROQ_CONFIG", DEFAULT_CONFIG_PATH)

    config_path = resolve_config_path(path)

    if not config_path.exists():
        if explicit:
            logger.error(f"Config file not found: {config_path}")
            raise ConfigurationError(f"Config file not found: {config_path}")
        logger.info(f"No config file at {config_path}, using defaults")
        return {}

    logger.info(f"Loading configuration from {config_path}")

    env_values: dict[str, str] = {}
    if substitute_env:
        env_file = resolve_env_path(config_path, env_path)
        if env_file.exists():
            logger.info(f"Loading environment variables from {env_file}")
            env_values = load_env_values(env_file)

    with config_path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config root must be a mapping: {config_path}")

    if substitute_env:
        data = _substitute_env_vars(data, env_values)

    return data


def _substitute_env_vars(
    obj: Any, env_values: Mapping[str, str] | None = None
) -> Any:
    """Recursively substitute ${VAR_NAME} and $VAR_NAME in string values.

    Values from the .env file win over the process environment. Unset
    variables leave the placeholder in place and log a warning.
    """
    env_values = env_values or {}

    if isinstance(obj, dict):
        return {k: _substitute_env_vars(v, env_values) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_substitute_env_vars(item, env_values) for item in obj]
    if isinstance(obj, str):

        def replace_var(match):
            var_name = match.group(1) or match.group(2)
            value = env_values.get(var_name)
            if value is None:
                value = os.getenv(var_name)
            if value is None:
                logger.warning(
                    f"CONFIG ERROR: Environment variable '${var_name}' is not set! "
                    f"The literal placeholder will be used."
                )
                return match.group(0)
            return value

        return _ENV_PATTERN.sub(replace_var, obj)
    return obj


def _section(config: Mapping[str, Any], *keys: str) -> Mapping[str, Any]:
    cur: Any = config
    for key in keys:
        cur = cur.get(key) if isinstance(cur, Mapping) else None
    return cur if isinstance(cur, Mapping) else {}


def _coerce(value: Any, cast, name: str) -> Any:
    try:
        return cast(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid value for {name}: {value!r}") from exc


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def settings_from_config(config: Mapping[str, Any]) -> ProxySettings:
    """Build ProxySettings from a loaded config dict.

    ANTHROQ_HOST and ANTHROQ_PORT take priority over the config file.

    Raises:
        ConfigurationError: If a numeric value cannot be parsed.
    """
    proxy_settings = _section(config, "proxy_settings")
    server_cfg = _section(proxy_settings, "server")
    downstream = _section(proxy_settings, "downstream")
    defaults = ProxySettings()

    timeout = downstream.get("request_timeout", defaults.request_timeout)
    if timeout is not None:
        timeout = _coerce(timeout, float, "downstream.request_timeout")

    host = os.getenv("ANTHROQ_HOST") or server_cfg.get("host", defaults.host)
    port = os.getenv("ANTHROQ_PORT") or server_cfg.get("port", defaults.port)

    return ProxySettings(
        provider=str(downstream.get("provider", defaults.provider)),
        downstream_url=str(downstream.get("url", defaults.downstream_url)),
        downstream_model=str(downstream.get("model", defaults.downstream_model)),
        max_output_tokens=_coerce(
            downstream.get("max_output_tokens", defaults.max_output_tokens),
            int,
            "downstream.max_output_tokens",
        ),
        default_temperature=_coerce(
            downstream.get("default_temperature", defaults.default_temperature),
            float,
            "downstream.default_temperature",
        ),
        request_timeout=timeout,
        expose_diagnostics=_as_bool(
            proxy_settings.get("expose_diagnostics", defaults.expose_diagnostics)
        ),
        host=str(host),
        port=_coerce(port, int, "server.port"),
        log_level=str(proxy_settings.get("log_level", defaults.log_level)).upper(),
    )


def load_settings(path: str | None = None, env_path: str | None = None) -> ProxySettings:
    """Load the config file and turn it into ProxySettings."""
    return settings_from_config(load_config(path, env_path))
