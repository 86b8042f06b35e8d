"""Locate, read and validate the forgepr YAML configuration.

Lookup order for the config file:
1. --config flag
2. $FORGEPR_CONFIG
3. ./forgepr.yaml
4. $XDG_CONFIG_HOME/forgepr/config.yaml

String values may reference environment variables as ``${VAR}``. An
undefined variable is a config error, with one exception: ``github.token``
set to ``${GITHUB_TOKEN}`` while GITHUB_TOKEN is unset is dropped, so the
missing credential surfaces as an authentication failure when the client
is built.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from forgepr.config.schema import Config
from forgepr.github.auth import TOKEN_ENV_VAR
from forgepr.paths import get_default_config_path

CONFIG_ENV_VAR = "FORGEPR_CONFIG"
LOCAL_CONFIG_NAME = "forgepr.yaml"

ENV_REFERENCE = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)\}")
TOKEN_REFERENCE = f"${{{TOKEN_ENV_VAR}}}"


class ConfigError(Exception):
    """Configuration could not be loaded."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class ConfigNotFoundError(ConfigError):
    """No config file exists at any searched location."""


class ConfigValidationError(ConfigError):
    """The config file does not match the schema.

    Attributes:
        validation_errors: Pydantic error dicts, one per invalid field.
    """

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        validation_errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.validation_errors = validation_errors or []
        super().__init__(message, path)


class EnvironmentVariableError(ConfigError):
    """A ``${VAR}`` reference names an unset environment variable."""

    def __init__(self, var_name: str, path: Path | None = None) -> None:
        self.var_name = var_name
        super().__init__(f"Environment variable '{var_name}' is not set.", path)


def config_search_paths() -> list[Path]:
    """Get the implicit config locations in lookup order."""
    paths: list[Path] = []
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        paths.append(Path(env_path).expanduser().resolve())
    paths.append(Path.cwd() / LOCAL_CONFIG_NAME)
    paths.append(get_default_config_path())
    return paths


def discover_config_path(explicit_path: str | Path | None = None) -> Path:
    """Find the config file to load.

    Raises:
        ConfigNotFoundError: If the explicit path is missing, or no implicit
            location holds a file.
    """
    if explicit_path:
        path = Path(explicit_path).expanduser().resolve()
        if not path.exists():
            raise ConfigNotFoundError(f"Config file not found: {path}", path)
        return path

    searched = config_search_paths()
    for path in searched:
        if path.exists():
            return path

    locations = "".join(f"\n  - {p}" for p in searched)
    raise ConfigNotFoundError(f"No config file found. Searched locations:{locations}")


def _substitute(value: Any, path: Path) -> Any:
    if isinstance(value, dict):
        return {key: _substitute(item, path) for key, item in value.items()}
    if isinstance(value, list):
        return [_substitute(item, path) for item in value]
    if not isinstance(value, str):
        return value

    def lookup(match: re.Match[str]) -> str:
        name = match.group(1)
        resolved = os.environ.get(name)
        if resolved is None:
            raise EnvironmentVariableError(name, path)
        return resolved

    return ENV_REFERENCE.sub(lookup, value)


def _defer_unset_token(raw: dict[str, Any]) -> dict[str, Any]:
    """Drop ``github.token: ${GITHUB_TOKEN}`` when the variable is unset."""
    github = raw.get("github")
    if (
        isinstance(github, dict)
        and github.get("token") == TOKEN_REFERENCE
        and TOKEN_ENV_VAR not in os.environ
    ):
        github = {key: value for key, value in github.items() if key != "token"}
        return {**raw, "github": github}
    return raw


def _read_mapping(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {e}", path) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}", path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a YAML mapping at the top level", path)
    return data


def load_config(path: str | Path | None = None) -> Config:
    """Load the forgepr configuration.

    Args:
        path: Explicit config file; None searches the default locations.

    Returns:
        Validated Config.

    Raises:
        ConfigNotFoundError: No config file was found.
        ConfigError: The file is unreadable or not a YAML mapping.
        EnvironmentVariableError: A referenced variable is unset.
        ConfigValidationError: The content fails schema validation.
    """
    config_path = discover_config_path(path)
    raw = _substitute(_defer_unset_token(_read_mapping(config_path)), config_path)

    try:
        return Config.model_validate(raw)
    except ValidationError as e:
        errors = [dict(err) for err in e.errors()]
        lines = [
            f"  - {'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in errors
        ]
        raise ConfigValidationError(
            f"Config validation failed ({len(errors)} error(s)):\n" + "\n".join(lines),
            path=config_path,
            validation_errors=errors,
        ) from e
