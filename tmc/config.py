"""
Connection configuration for the Transmission CLI.

Merges the persisted YAML config file, TRANSMISSION_* environment variables,
command-line flags and an optional RPC URL into a single ConnectionProfile.
Sources are applied in that order, later sources winning:

    ~/.tmc/config.yaml  <  environment  <  flags  <  --url
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import unquote, urlsplit

import dotenv
import yaml
from rich.prompt import Prompt

from .exceptions import ConfigError
from .logger import logger


dotenv.load_dotenv()


# Defaults
VERBOSE = False
LOG_PATH = ""
LOG_LEVEL = "DEBUG"
LOG_ROTATION = "1 week"
LOG_RETENTION = "1 month"

HOME = os.path.expanduser("~")
CONFIG_DIR = os.path.join(HOME, ".tmc")
CONFIG_NAMES = ("config.yaml", "config.yml")
SAVE_NAME = "config.yml"

ENV_PREFIX = "TRANSMISSION_"
SETTING_KEYS = ("host", "port", "url", "user", "password", "https", "useragent", "path")

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 0
DEFAULT_USERAGENT = "TorrentCLI"
HTTPS_PORT = 443

TRUE_VALUES = ("1", "t", "true", "y", "yes", "on")
FALSE_VALUES = ("", "0", "f", "false", "n", "no", "off")


class Config:
    VERBOSE = os.getenv("VERBOSE", str(VERBOSE)).lower() == "true"

    LOG_PATH = os.getenv("LOG_PATH", LOG_PATH)
    LOG_LEVEL = os.getenv("LOG_LEVEL", LOG_LEVEL)
    LOG_ROTATION = os.getenv("LOG_ROTATION", LOG_ROTATION)
    LOG_RETENTION = os.getenv("LOG_RETENTION", LOG_RETENTION)

    CONFIG_DIR = os.getenv("TMC_CONFIG_DIR", CONFIG_DIR)


@dataclass(frozen=True)
class ConnectionProfile:
    """Effective connection settings for one CLI invocation."""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    https: bool = False
    user: Optional[str] = None
    password: Optional[str] = None
    path: Optional[str] = None
    useragent: str = DEFAULT_USERAGENT

    def as_dict(self) -> Dict[str, Any]:
        """Mapping written by `save`, keyed like the config file and flags."""
        data = {
            "host": self.host,
            "port": self.port,
            "https": self.https,
            "user": self.user,
            "password": self.password,
            "path": self.path,
            "useragent": self.useragent,
        }
        return {key: value for key, value in data.items() if value is not None}

    def __repr__(self):
        password = "***" if self.password else None
        return (
            f"ConnectionProfile(host={self.host!r}, port={self.port}, https={self.https}, "
            f"user={self.user!r}, password={password!r}, path={self.path!r}, "
            f"useragent={self.useragent!r})"
        )


def parse_bool(value: Any, key: str = "https") -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {key}: {value!r}")


def parse_port(value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Invalid port: {value!r}")
    try:
        port = int(str(value).strip(), 10)
    except ValueError as e:
        raise ConfigError(f"Invalid port {value!r}: {e}") from e
    if not 0 <= port <= 65535:
        raise ConfigError(f"Invalid port {value!r}: out of range 0-65535")
    return port


def find_config_file(directory: Optional[str] = None) -> Optional[Path]:
    base = Path(directory or Config.CONFIG_DIR)
    for name in CONFIG_NAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def load_config_file(directory: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the persisted settings from the config directory.

    Missing files are not an error; the first run has none.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping
    """
    path = find_config_file(directory)
    if path is None:
        logger.debug(f"No config file in {directory or Config.CONFIG_DIR}")
        return {}

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    logger.debug(f"Loaded config file {path}")
    return {key: value for key, value in raw.items() if key in SETTING_KEYS}


def env_settings(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect TRANSMISSION_<KEY> variables, e.g. TRANSMISSION_HOST -> host; empty ones are unset."""
    if environ is None:
        environ = os.environ
    settings = {}
    for key in SETTING_KEYS:
        value = environ.get(ENV_PREFIX + key.upper())
        if value:
            settings[key] = value
    return settings


def parse_url(url: str) -> Dict[str, Any]:
    """
    Break an RPC URL into the settings it overrides.

    host and https always come from the URL; user, password, port and path
    only when the URL carries them.
    """
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise ConfigError(f"Invalid url {url!r}: {e}") from e

    if not parts.scheme or not parts.hostname:
        raise ConfigError(f"Invalid url {url!r}: expected scheme://host")

    settings: Dict[str, Any] = {
        "host": parts.hostname,
        "https": parts.scheme.lower() == "https",
    }
    if parts.username is not None:
        settings["user"] = unquote(parts.username)
    if parts.password is not None:
        settings["password"] = unquote(parts.password)
    if port is not None:
        settings["port"] = port

    request_uri = parts.path
    if parts.query:
        request_uri = f"{request_uri or '/'}?{parts.query}"
    if request_uri and request_uri != "/":
        settings["path"] = request_uri
    return settings


def prompt_password() -> str:
    """Ask for the RPC password on the terminal without echoing it."""
    try:
        return Prompt.ask("Password", password=True)
    except (EOFError, KeyboardInterrupt) as e:
        raise ConfigError("Password prompt failed: no input available") from e


def resolve_profile(
    flags: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
    config_dir: Optional[str] = None,
    prompt: Callable[[], str] = prompt_password,
) -> ConnectionProfile:
    """
    Merge every configuration source into a ConnectionProfile.

    Args:
        flags: Values given on the command line; None entries are ignored
        environ: Environment to read TRANSMISSION_* variables from
        config_dir: Directory holding config.yaml / config.yml
        prompt: Called for a password when a user is set without one

    Raises:
        ConfigError: On a malformed url, port or boolean, or a failed prompt
    """
    merged: Dict[str, Any] = {}
    merged.update(load_config_file(config_dir))
    merged.update(env_settings(environ))
    merged.update({key: value for key, value in (flags or {}).items()
                   if key in SETTING_KEYS and value is not None})

    url = merged.pop("url", None)
    if url:
        merged.update(parse_url(str(url)))

    https = parse_bool(merged.get("https", False))
    port = parse_port(merged.get("port", DEFAULT_PORT))
    if https and port == 0:
        port = HTTPS_PORT

    user = merged.get("user") or None
    password = merged.get("password") or None
    if user and not password:
        logger.debug(f"No password configured for user {user}, prompting")
        password = prompt()

    profile = ConnectionProfile(
        host=str(merged.get("host") or DEFAULT_HOST),
        port=port,
        https=https,
        user=str(user) if user else None,
        password=str(password) if password else None,
        path=str(merged["path"]) if merged.get("path") else None,
        useragent=str(merged.get("useragent") or DEFAULT_USERAGENT),
    )
    logger.debug(f"Resolved {profile!r}")
    return profile


def save_config(profile: ConnectionProfile, path: Optional[Path] = None) -> Path:
    """
    Write the profile to the config file, creating its directory.

    The password is written in plain text when the profile has one.
    """
    path = Path(path) if path else Path(Config.CONFIG_DIR) / SAVE_NAME
    try:
        path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        text = yaml.safe_dump(profile.as_dict(), sort_keys=False)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise ConfigError(f"Failed to save configuration to {path}: {e}") from e
    logger.info(f"Saved configuration to {path}")
    return path
