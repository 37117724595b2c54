import tomllib
import os
import logging
from typing import Dict, Any, Optional

CONFIG_FILE_PATH = "pyproject.toml"

DEFAULT_PURL_CONFIG = {
    "logging_level": "WARNING",
    "strict_validation": False,
}

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


def get_logging_level_from_string(level_str: str) -> int:
    """Converts a logging level string to its integer value."""
    return getattr(logging, level_str.upper(), logging.INFO)


def _parse_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    logging.getLogger(__name__).warning(f"Invalid boolean value {value!r}. Using default: {default}")
    return default


def load_purl_config(config_file_path: str = CONFIG_FILE_PATH) -> Dict[str, Any]:
    """
    Loads purlkit configuration from the [tool.purlkit] table of pyproject.toml.
    Falls back to default values if the file or specific keys are not found.
    Environment variables `PURLKIT_LOG_LEVEL` and `PURLKIT_STRICT` override the file.
    """
    config = DEFAULT_PURL_CONFIG.copy()

    try:
        with open(config_file_path, "rb") as f:
            data = tomllib.load(f)
            tool_config = data.get("tool", {}).get("purlkit", {})
            if tool_config:
                config["logging_level"] = tool_config.get("logging_level", config["logging_level"])
                config["strict_validation"] = _parse_bool(
                    tool_config.get("strict_validation", config["strict_validation"]),
                    DEFAULT_PURL_CONFIG["strict_validation"],
                )
    except FileNotFoundError:
        logging.getLogger(__name__).info(f"{config_file_path} not found. Using default configurations.")
    except tomllib.TOMLDecodeError:
        logging.getLogger(__name__).error(f"Error decoding {config_file_path}. Using default configurations.")

    # Environment variables override pyproject.toml settings.
    config["logging_level"] = os.getenv("PURLKIT_LOG_LEVEL", config["logging_level"])
    strict_env = os.getenv("PURLKIT_STRICT")
    if strict_env is not None:
        config["strict_validation"] = _parse_bool(strict_env, config["strict_validation"])

    config["logging_level_int"] = get_logging_level_from_string(str(config["logging_level"]))

    return config


def configure_logging(level: Optional[int] = None) -> logging.Logger:
    """Sets the level of the `purlkit` logger tree.

    Args:
        level: A logging level such as `logging.DEBUG`. Defaults to the configured level.

    Returns:
        The `purlkit` package logger.
    """
    logger = logging.getLogger("purlkit")
    logger.setLevel(level if level is not None else PURL_CONFIG["logging_level_int"])
    return logger


# Load configuration once when the module is imported.
PURL_CONFIG = load_purl_config()
