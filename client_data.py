import uuid
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from config import settings as default_settings, Settings
from dotfile import read_mapping, write_mapping
from exceptions import PersistenceError
from models import ClientDataRecord

class ClientData:
    """
    The client's own state, kept in a dotfile next to the keyfile.

    It never stores the license key itself.
    """

    DOTFILE_NAME = ".rpw_info"

    def __init__(self, directory: Optional[Path] = None, settings: Optional[Settings] = None):
        settings = settings or default_settings
        self.directory = Path(directory) if directory is not None else settings.home_dir()

    @property
    def path(self) -> Path:
        return self.directory / self.DOTFILE_NAME

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> ClientDataRecord:
        data = read_mapping(self.path)
        if data is None:
            return ClientDataRecord()

        try:
            return ClientDataRecord.model_validate(data)
        except ValidationError as e:
            raise PersistenceError(self.path, "Client data is malformed") from e

    def save(self, record: ClientDataRecord) -> ClientDataRecord:
        write_mapping(self.path, record.model_dump(exclude_none=True))
        return record

    def update(self, **changes) -> ClientDataRecord:
        current = self.load()
        merged = current.model_copy(update=changes)
        return self.save(merged)

    def installation_id(self) -> str:
        """Get or generate the unique installation ID."""
        record = self.load()
        if record.installation_id:
            return record.installation_id

        new_id = str(uuid.uuid4())
        self.update(installation_id=new_id)
        logger.info(f"Generated installation id {new_id}")
        return new_id
