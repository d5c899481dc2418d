"""Profile store with local-over-global precedence.

Precedence (highest to lowest):
1. Local config (./.preflight.json in the project)
2. Global config (~/.preflight/config.json, or $PREFLIGHT_GLOBAL_CONFIG)
3. Built-in defaults
"""

import json
import os
from enum import Enum
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from ..cli.errors import ConfigurationError
from ..preflight_logging import get_logger
from .models import ProfileSet

logger = get_logger()


class ConfigScope(Enum):
    """Where a profile set is stored."""

    LOCAL = "local"
    GLOBAL = "global"


class ConfigPaths:
    """Standard configuration file paths."""

    LOCAL_CONFIG = ".preflight.json"

    GLOBAL_DIR_NAME = ".preflight"
    GLOBAL_CONFIG_NAME = "config.json"
    GLOBAL_ENV_VAR = "PREFLIGHT_GLOBAL_CONFIG"

    @classmethod
    def local_config(cls, project_path: Path) -> Path:
        return project_path / cls.LOCAL_CONFIG

    @classmethod
    def global_config(cls) -> Path:
        """Global config path, honouring the environment override."""
        override = os.environ.get(cls.GLOBAL_ENV_VAR)
        if override:
            return Path(override).expanduser()
        return Path.home() / cls.GLOBAL_DIR_NAME / cls.GLOBAL_CONFIG_NAME

    @classmethod
    def for_scope(cls, scope: ConfigScope, project_path: Path) -> Path:
        if scope is ConfigScope.LOCAL:
            return cls.local_config(project_path)
        return cls.global_config()


class ProfileStore:
    """Loads and stores the ProfileSet for a project.

    Example:
        store = ProfileStore(Path.cwd())
        profiles = store.load()
        print(store.active_scope())
    """

    def __init__(self, project_path: Path | None = None):
        self.project_path = Path(project_path).resolve() if project_path else Path.cwd()

    def active_scope(self) -> ConfigScope:
        """LOCAL whenever a local config exists, GLOBAL otherwise."""
        if ConfigPaths.local_config(self.project_path).exists():
            return ConfigScope.LOCAL
        return ConfigScope.GLOBAL

    def active_path(self) -> Path:
        return ConfigPaths.for_scope(self.active_scope(), self.project_path)

    def load(self) -> ProfileSet:
        """Load the active profile set.

        Raises:
            ConfigurationError: If the active file cannot be read or parsed,
                or does not describe a valid profile set.
        """
        path = self.active_path()
        if not path.exists():
            logger.debug(f"No config at {path}, using defaults")
            return ProfileSet()

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in preflight config: {e}", config_file=str(path)
            ) from e
        except UnicodeDecodeError as e:
            raise ConfigurationError(
                f"Preflight config is not valid UTF-8: {e}", config_file=str(path)
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read preflight config: {e}", config_file=str(path)
            ) from e

        try:
            profile_set = ProfileSet.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid preflight config: {e.error_count()} validation error(s)\n{e}",
                config_file=str(path),
            ) from e

        logger.debug(
            f"Loaded {len(profile_set.profiles)} profile(s) from {path}"
        )
        return profile_set

    def store(self, profile_set: ProfileSet, scope: ConfigScope) -> Path:
        """Write a profile set to the given scope, replacing what is there.

        Returns:
            The path written.

        Raises:
            ConfigurationError: If the file cannot be written.
        """
        path = ConfigPaths.for_scope(scope, self.project_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(profile_set.model_dump(), f, indent=2)
                f.write("\n")
        except OSError as e:
            raise ConfigurationError(
                f"Cannot write preflight config: {e}", config_file=str(path)
            ) from e

        logger.info(f"Stored {len(profile_set.profiles)} profile(s) in {path}")
        return path


def load_profiles(project_path: Path | None = None) -> ProfileSet:
    """Convenience wrapper around ProfileStore.load()."""
    return ProfileStore(project_path).load()


def store_profiles(
    profile_set: ProfileSet, scope: ConfigScope, project_path: Path | None = None
) -> Path:
    """Convenience wrapper around ProfileStore.store()."""
    return ProfileStore(project_path).store(profile_set, scope)


def active_scope(project_path: Path | None = None) -> ConfigScope:
    return ProfileStore(project_path).active_scope()
