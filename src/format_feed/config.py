"""YAML configuration loader for the feed formatter."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

# Config directory relative to this file
CONFIG_DIR = Path(__file__).parent / "configs"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class FormatConfig:
    list_name: str = "entries"
    log_level: str = "INFO"
    output_dir: str = "output"
    pretty: bool = False

    def __post_init__(self) -> None:
        if not self.list_name:
            raise ValueError("list_name must not be empty")

        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. Must be one of {list(LOG_LEVELS)}"
            )

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)


def load_config(name: str) -> FormatConfig:
    """Load formatter config by name (e.g., 'test' or 'prod').

    Args:
        name: Config name without extension, or full path to config file

    Returns:
        FormatConfig instance. FORMAT_FEED_LOG_LEVEL overrides the log level.
    """
    if "/" in name or name.endswith(".yaml") or name.endswith(".yml"):
        config_path = Path(name)
    else:
        config_path = CONFIG_DIR / f"{name}.yaml"

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return FormatConfig(
        list_name=data.get("list_name", "entries"),
        log_level=os.getenv("FORMAT_FEED_LOG_LEVEL") or data.get("log_level", "INFO"),
        output_dir=data.get("output_dir", "output"),
        pretty=bool(data.get("pretty", False)),
    )
