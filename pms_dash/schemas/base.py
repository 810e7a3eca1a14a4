from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for wire schemas: snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope used by the role-management endpoints."""
    success: bool
    message: str
    data: Optional[T] = None

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "ApiResponse":
        return cls(success=True, message=message, data=data)
