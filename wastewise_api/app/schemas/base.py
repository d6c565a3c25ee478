"""
Shared pydantic configuration.

Python code uses snake_case attributes while the JSON exchanged with
the browser client uses camelCase (``userId``, ``greenPoints``).
``CamelModel`` generates the camelCase aliases and accepts either
spelling on input.
"""

from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_json(self) -> dict:
        """Dump using the wire (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC so they compare with ``utcnow()``."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


def reject_null(value):
    """Patch fields that are required on the record may be omitted but not nulled."""
    if value is None:
        raise ValueError("may not be null")
    return value
