from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Gateway Configuration
    GATEWAY_URL: str = "localhost:3000"
    GATEWAY_TIMEOUT: int = 30

    # Installation Info
    APP_VERSION: str = "0.1.0"

    # Dotfile location (defaults to the user's home directory)
    HOME_DIR: Optional[Path] = None

    # Test wiring: talk to a real gateway instead of a fake one
    LIVE_SERVER: bool = False

    class Config:
        env_file = ".env"
        env_prefix = "RPW_"

    def home_dir(self) -> Path:
        """Directory holding the keyfile and client-data dotfiles."""
        if self.HOME_DIR is not None:
            return Path(self.HOME_DIR).expanduser()
        return Path.home()

settings = Settings()
