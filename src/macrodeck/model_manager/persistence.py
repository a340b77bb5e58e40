"""JSON persistence for pydantic models.

Only AppConfig is persisted; key layouts live for a single session.

Writes go to ``<file>.tmp`` and are renamed into place, and the previous
file is kept as ``<file>.bak``.
"""

import logging
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from macrodeck.exceptions import ConfigFileInvalidError, ConfigurationError, wrap_pydantic_error

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class PydanticPersistence:
    """Static helpers for reading and writing models as JSON files."""

    @staticmethod
    def load_json(path: Path, model_type: type[M]) -> M:
        """
        Read ``path`` and validate it as ``model_type``.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigFileInvalidError: If the file is empty or not JSON
            ConfigValidationError: If a value fails validation
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigFileInvalidError(str(path), f"Cannot read file: {e}") from e

        if not text.strip():
            raise ConfigFileInvalidError(str(path), "File is empty")

        try:
            model = model_type.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"Invalid {model_type.__name__} in {path}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        logger.debug(f"Loaded {model_type.__name__} from {path}")
        return model

    @staticmethod
    def save_json(data: BaseModel, path: Path, indent: int = 2, backup: bool = True) -> None:
        """
        Write ``data`` to ``path``, creating parent directories.

        Raises:
            ConfigurationError: If the file cannot be written
        """
        name = type(data).__name__
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            if backup and path.exists():
                shutil.copy2(path, path.with_suffix(path.suffix + ".bak"))

            tmp_path.write_text(data.model_dump_json(indent=indent), encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            logger.error(f"Failed to save {name} to {path}: {e}")
            raise ConfigurationError(
                user_message=f"Failed to save configuration to {path}",
                technical_message=f"Writing {name} to {path} failed: {e}",
                recovery_hint="Check file permissions and free disk space",
            ) from e
        finally:
            tmp_path.unlink(missing_ok=True)

        logger.debug(f"Saved {name} to {path}")

    @staticmethod
    def load_json_or_default(
        path: Path, model_type: type[M], default_factory: Callable[[], M] | None = None
    ) -> M:
        """
        Like load_json, but a missing file yields defaults instead of an error.

        The default is not written back to disk.
        """
        try:
            return PydanticPersistence.load_json(path, model_type)
        except FileNotFoundError:
            logger.info(f"No config at {path}, using default {model_type.__name__}")
            return default_factory() if default_factory else model_type()
