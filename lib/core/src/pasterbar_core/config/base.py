# region Docstring
"""
pasterbar_core.config.base

Environment detection and per-user data directory resolution.

Overview:
- Provides a utility class for detecting the current application environment
    (production, development, or test) from an environment variable.
- Resolves the per-user application-data directory in which the history
    database, the managed image directory, logs and YAML config files live.

Contents:
- Classes:
    - AppEnv:
        Class methods to determine the environment and the data root.

- Module-level Constants:
    - APP_NAME (str): Name used for the platform data directory.
    - APP_ROOT (Path): The resolved per-user data directory.
    - APP_ENV (Literal["prod", "dev", "test"]): The detected environment.

Environment Detection Logic:
- PASTERBAR_ENV selects the environment explicitly; anything unrecognised
    falls back to "prod".
- PASTERBAR_HOME overrides the data root; otherwise platformdirs'
    user_data_dir("pasterbar") is used.
"""
# endregion
# region Imports
import os
from pathlib import Path
from typing import Literal

from platformdirs import user_data_dir

# endregion
# region AppEnv Class

APP_NAME = "pasterbar"


class AppEnv:
    """
    Application environment detection utility.

    Attributes:
        PROD (Literal["prod"]): Constant representing the production environment.
        DEV (Literal["dev"]): Constant representing the development environment.
        TEST (Literal["test"]): Constant representing the test environment.
    """

    PROD: Literal["prod"] = "prod"
    DEV: Literal["dev"] = "dev"
    TEST: Literal["test"] = "test"

    @classmethod
    def environment(cls) -> Literal["prod", "dev", "test"]:
        """Determine the current application environment."""
        env = os.getenv("PASTERBAR_ENV", "").lower()
        if env in {cls.PROD, cls.DEV, cls.TEST}:
            return env
        return cls.PROD

    @classmethod
    def app_root(cls) -> Path:
        """Get the per-user application data directory."""
        override = os.getenv("PASTERBAR_HOME")
        if override:
            return Path(override).expanduser().resolve()
        return Path(user_data_dir(APP_NAME, appauthor=False)).resolve()


# endregion
# region Module-level Constants

APP_ROOT: Path = AppEnv.app_root()
"""[Path] Per-user data directory of the application."""
APP_ENV: Literal["prod", "dev", "test"] = AppEnv.environment()
"""[Literal] Environment type."""
# endregion


__all__ = [
    "APP_ENV",
    "APP_NAME",
    "APP_ROOT",
    "AppEnv",
]
