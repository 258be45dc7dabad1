from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from config import settings as default_settings, Settings
from dotfile import read_mapping, write_mapping
from exceptions import PersistenceError
from models import KeyRecord

def mask_key(key: str) -> str:
    """Show only the last four characters of a license key."""
    if len(key) <= 4:
        return "*" * len(key)
    return "*" * (len(key) - 4) + key[-4:]

class Keyfile:
    """
    The local dotfile holding the license key.

    Each write replaces the whole file with ``{key: <key>}``; the library
    never deletes it.
    """

    DOTFILE_NAME = ".rpw_key"

    def __init__(self, directory: Optional[Path] = None, settings: Optional[Settings] = None):
        settings = settings or default_settings
        self.directory = Path(directory) if directory is not None else settings.home_dir()

    @property
    def path(self) -> Path:
        return self.directory / self.DOTFILE_NAME

    def exists(self) -> bool:
        return self.path.exists()

    def write(self, key: str) -> str:
        """
        Persist ``key``, overwriting any previous keyfile.

        Returns the key written. Raises PersistenceError if the file
        cannot be written.
        """
        record = KeyRecord(key=key)
        write_mapping(self.path, record.model_dump())
        logger.debug(f"Stored license key {mask_key(key)} in {self.path}")
        return record.key

    def read(self) -> Optional[KeyRecord]:
        data = read_mapping(self.path)
        if data is None:
            return None

        try:
            return KeyRecord.model_validate(data)
        except ValidationError as e:
            raise PersistenceError(self.path, "Keyfile has no valid key") from e

    @property
    def key(self) -> Optional[str]:
        record = self.read()
        return record.key if record else None
