"""Load WordLang configuration"""

import codecs
import logging
from pathlib import Path
from typing import Union

import toml

from .config_classes import DEFAULT_CONFIG_FILE, Settings
from .exceptions import UserResolvableError

LOG = logging.getLogger(__name__)

DEFAULT_CONFIG_FILEPATH = Path(DEFAULT_CONFIG_FILE)


class ConfigError(UserResolvableError):
    """Error loading configuration"""


def load(args: dict) -> Settings:
    """Load the configuration named on the command line (or the default)"""
    if args.get("--config"):
        config_file = Path(args["--config"])
    else:
        config_file = DEFAULT_CONFIG_FILEPATH

    # Only complain about a missing file if the user asked for it explicitly
    required = config_file != DEFAULT_CONFIG_FILEPATH
    return load_file(config_file, required=required)


def load_file(config_file: Union[str, Path], required=True) -> Settings:
    """Load Settings from a TOML file"""
    config_file = Path(config_file)

    try:
        data = toml.load(config_file)
    except FileNotFoundError:
        if required:
            raise ConfigError(
                f"{config_file} not found",
                "Check the --config path, or leave it out to use the defaults.",
            )
        LOG.debug("No %s, using default settings", config_file)
        return Settings()
    except OSError as exc:
        raise ConfigError(f"Can't read {config_file}", str(exc))
    except toml.TomlDecodeError as exc:
        raise ConfigError(f"Can't parse {config_file}", str(exc))

    section = data.get("wordlang", {})
    if not isinstance(section, dict):
        raise ConfigError(
            f"`wordlang' in {config_file} is not a table", "Use a [wordlang] section."
        )
    return from_dict(section, source=config_file)


def from_dict(data: dict, source="<config>") -> Settings:
    """Validate a dict of settings and build a Settings object"""
    unknown = set(data) - set(Settings.keys())
    if unknown:
        raise ConfigError(
            f"Unknown keys in {source}: {', '.join(sorted(unknown))}",
            f"Supported keys in [wordlang]: {', '.join(Settings.keys())}",
        )

    try:
        settings = Settings(**data)
    except ValueError as exc:
        raise ConfigError(f"Bad value in {source}", str(exc))

    try:
        codecs.lookup(settings.encoding)
    except LookupError:
        raise ConfigError(
            f"Unknown encoding `{settings.encoding}' in {source}",
            "Use a Python codec name, e.g. utf-8 or latin-1.",
        )

    LOG.debug("Loaded settings from %s: %s", source, settings)
    return settings
