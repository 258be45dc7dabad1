import threading
from datetime import datetime, timezone
from typing import Optional

from loguru import logger

from client_data import ClientData
from config import settings as default_settings, Settings
from exceptions import PersistenceError, RPWError
from gateway import Gateway, build_gateway
from keyfile import Keyfile, mask_key

class Client:
    def __init__(
        self,
        keyfile: Optional[Keyfile] = None,
        client_data: Optional[ClientData] = None,
        gateway: Optional[Gateway] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        self.keyfile = keyfile or Keyfile(settings=self.settings)
        self.client_data = client_data or ClientData(settings=self.settings)
        self._gateway = gateway
        self._owns_gateway = gateway is None
        self._gateway_lock = threading.Lock()

    @property
    def gateway(self) -> Gateway:
        """
        Handle to the remote license service.

        Created on first access and reused for the lifetime of the client.
        """
        if self._gateway is None:
            with self._gateway_lock:
                if self._gateway is None:
                    self._gateway = build_gateway(self.settings)
        return self._gateway

    def setup(self, key: str) -> str:
        """
        Store the license key in the keyfile.

        Returns the key unchanged. Raises RPWError if the key is blank or
        the keyfile cannot be written.
        """
        if not isinstance(key, str) or not key.strip():
            raise RPWError("A license key is required")

        try:
            stored = self.keyfile.write(key)
        except PersistenceError as e:
            logger.error(f"License key setup failed: {e}")
            raise RPWError(f"Could not create keyfile at {self.keyfile.path}") from e

        logger.info(f"License key {mask_key(stored)} set up")
        return stored

    @property
    def key(self) -> Optional[str]:
        try:
            return self.keyfile.key
        except PersistenceError as e:
            raise RPWError(f"Could not read keyfile at {self.keyfile.path}") from e

    @property
    def installation_id(self) -> str:
        try:
            return self.client_data.installation_id()
        except PersistenceError as e:
            raise RPWError(f"Could not access client data at {self.client_data.path}") from e

    def authenticate(self) -> bool:
        """
        Check the stored key with the gateway and record the outcome.
        """
        key = self.key
        if key is None:
            raise RPWError("No license key set up")

        valid = self.gateway.authenticate_key(key)
        now = datetime.now(timezone.utc).isoformat(timespec="seconds")

        try:
            self.client_data.update(key_valid=valid, last_validated_at=now)
        except PersistenceError as e:
            raise RPWError(f"Could not write client data at {self.client_data.path}") from e

        if valid:
            logger.info(f"License key {mask_key(key)} authenticated")
        else:
            logger.warning(f"License key {mask_key(key)} was rejected by the gateway")
        return valid

    def latest_version(self) -> bool:
        return self.gateway.latest_version(self.settings.APP_VERSION)

    def close(self) -> None:
        if self._owns_gateway and self._gateway is not None:
            self._gateway.close()
            self._gateway = None
