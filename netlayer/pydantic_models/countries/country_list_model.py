from pydantic import BaseModel
from typing import List

from .country_model import CountryDTO


class CountryListEnvelope(BaseModel):
    countries: List[CountryDTO]
