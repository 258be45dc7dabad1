from pydantic import BaseModel, ConfigDict
from typing import Optional

class KeyRecord(BaseModel):
    key: str

class ClientDataRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    installation_id: Optional[str] = None
    key_valid: Optional[bool] = None
    last_validated_at: Optional[str] = None
