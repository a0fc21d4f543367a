from pydantic import BaseModel
from typing import Optional

from netlayer.core.decoding import CustomDate


class CountryDTO(BaseModel):
    id: int
    name: str
    code: str
    flag_url: Optional[str] = None
    updated_at: Optional[CustomDate] = None
