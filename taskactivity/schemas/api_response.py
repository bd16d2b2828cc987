from typing import Any, Optional
from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Envelope used for JSON error bodies"""
    success: bool
    message: str
    data: Optional[Any] = None

    @classmethod
    def error(cls, message: str, data: Any = None) -> "ApiResponse":
        return cls(success=False, message=message, data=data)
