"""
Access to the remote license service.

The client only talks to the service through the Gateway interface, so a
fake implementation can stand in for the network in tests.
"""

from abc import ABC, abstractmethod
from typing import Optional

import httpx
from loguru import logger

from config import settings as default_settings, Settings
from exceptions import RPWError

class Gateway(ABC):
    @abstractmethod
    def authenticate_key(self, key: str) -> bool:
        """Ask the service whether ``key`` is a valid license."""

    @abstractmethod
    def latest_version(self, current: str) -> bool:
        """Whether ``current`` is the newest released client version."""

    def close(self) -> None:
        pass

def normalize_address(address: str) -> str:
    address = address.strip().rstrip("/")
    if "://" not in address:
        address = f"http://{address}"
    return address

class HttpGateway(Gateway):
    def __init__(
        self,
        address: str,
        timeout: float = default_settings.GATEWAY_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = normalize_address(address)
        self._http = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def authenticate_key(self, key: str) -> bool:
        try:
            response = self._http.get("/license", auth=(key, ""))
        except httpx.HTTPError as e:
            logger.warning(f"Key authentication failed against {self.base_url}: {e}")
            raise RPWError(f"Could not reach license gateway: {e}") from e

        return response.is_success

    def latest_version(self, current: str) -> bool:
        try:
            response = self._http.get("/latest_version")
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.warning(f"Version check failed against {self.base_url}: {e}")
            raise RPWError(f"Could not reach license gateway: {e}") from e
        except ValueError as e:
            raise RPWError("License gateway returned an invalid response") from e

        if not isinstance(data, dict):
            raise RPWError("License gateway returned an invalid response")
        return str(data.get("version", "")) == current

    def close(self) -> None:
        self._http.close()

def build_gateway(settings: Optional[Settings] = None) -> Gateway:
    settings = settings or default_settings
    logger.info(f"Connecting to license gateway at {settings.GATEWAY_URL}")
    return HttpGateway(settings.GATEWAY_URL, timeout=settings.GATEWAY_TIMEOUT)
