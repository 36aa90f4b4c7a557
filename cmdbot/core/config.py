"""Configuration loader."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml
from dotenv import load_dotenv

from .commands.registry import DEFAULT_PREFIX, DEFAULT_SEPARATOR
from .errors import ConfigError

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path("~/.cmdbot").expanduser()
ENV_FILE_NAME = ".env"
BOT_FILE = "bot.yaml"


@dataclass
class Config:
    prefix: str = DEFAULT_PREFIX
    separator: str = DEFAULT_SEPARATOR
    activity: str = ""
    no_prefix_commands: List[str] = field(default_factory=list)
    allowed_user_ids: List[str] = field(default_factory=list)
    config_dir: Path | None = None

    def is_user_allowed(self, user_id: str) -> bool:
        return not self.allowed_user_ids or user_id in self.allowed_user_ids


def resolve_config_dir(config_dir: Path | str | None) -> Path:
    """Resolve and validate the directory containing .env + bot.yaml."""
    raw = config_dir or os.getenv("CMDBOT_CONFIG_DIR")
    target = (Path(raw).expanduser() if raw else DEFAULT_CONFIG_DIR).resolve()
    if not target.exists():
        raise ConfigError(
            f"Config directory {target} does not exist. "
            "Create it and add bot.yaml (and optionally .env)."
        )
    if not target.is_dir():
        raise ConfigError(f"Config directory {target} is not a directory")
    return target


def load_config(config_dir: Path | str | None = None) -> Config:
    """Load bot configuration from the provided or default directory."""
    root = resolve_config_dir(config_dir)
    return _load_config_from_root(root)


def _load_config_from_root(root: Path) -> Config:
    _load_env_file(root / ENV_FILE_NAME)
    data = _load_bot_file(root / BOT_FILE)

    prefix = os.getenv("CMDBOT_PREFIX") or data.get("prefix") or DEFAULT_PREFIX
    if not isinstance(prefix, str) or not prefix or any(ch.isspace() for ch in prefix):
        raise ConfigError(f"Invalid prefix {prefix!r}: must be a non-empty string without spaces")

    separator = data.get("separator", DEFAULT_SEPARATOR)
    if not isinstance(separator, str) or len(separator) != 1:
        raise ConfigError(f"Invalid separator {separator!r}: must be a single character")

    no_prefix = data.get("no_prefix_commands") or []
    if not isinstance(no_prefix, list) or not all(isinstance(name, str) for name in no_prefix):
        raise ConfigError("no_prefix_commands must be a list of command names")

    return Config(
        prefix=prefix,
        separator=separator,
        activity=str(data.get("activity") or f"{prefix}help"),
        no_prefix_commands=no_prefix,
        allowed_user_ids=_load_allowed_user_ids(),
        config_dir=root,
    )


def _load_env_file(path: Path) -> None:
    if not path.exists():
        LOGGER.warning("No .env file found at %s; relying on shell environment.", path)
        return
    load_dotenv(dotenv_path=path, override=False)


def _load_allowed_user_ids() -> list[str]:
    raw_value = os.getenv("CMDBOT_ALLOWED_USER_IDS") or ""
    return [uid.strip() for uid in raw_value.split(",") if uid.strip()]


def _load_bot_file(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"bot.yaml not found at {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid bot.yaml structure at {path}")
    return data
