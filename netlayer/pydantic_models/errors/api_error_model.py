from pydantic import BaseModel, ConfigDict, Field, StrictStr
from typing import Any, Dict, List, Optional, Union


'''API error payload model (Pydantic)'''


class ApiErrorDTO(BaseModel):
    # Servers add their own keys next to the standard ones
    model_config = ConfigDict(extra="allow")

    message: StrictStr
    code: Optional[Union[int, str]] = None
    status: Optional[int] = None
    errors: List[Any] = Field(default_factory=list)
    details: Dict[str, Any] = Field(default_factory=dict)
