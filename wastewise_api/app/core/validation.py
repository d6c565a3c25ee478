"""
Per-entity payload validation.

Each ``validate_*`` function checks a raw JSON payload against the
matching pydantic schema and returns a ``ValidationResult`` instead of
raising, so handlers decide how to report failures.  Errors are plain
dictionaries ``{"path": [...], "message": "..."}`` with the field path
spelled the way the client sent it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..schemas.chat import ChatCreate
from ..schemas.item import ItemCreate, ListingUpdate
from ..schemas.message import MessageCreate
from ..schemas.user import LoginData, ProfileUpdate, UserCreate
from .errors import InvalidPayload

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class ValidationResult(Generic[ModelT]):
    ok: bool
    value: Optional[ModelT] = None
    errors: List[Dict[str, Any]] = field(default_factory=list)

    def unwrap(self) -> ModelT:
        """Return the validated value or raise ``InvalidPayload``."""
        if not self.ok:
            raise InvalidPayload(self.errors)
        return self.value


def error_list(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {"path": [str(p) for p in err["loc"]], "message": err["msg"]}
        for err in exc.errors()
    ]


def validate(schema: Type[ModelT], payload: Any) -> ValidationResult[ModelT]:
    if not isinstance(payload, dict):
        return ValidationResult(ok=False, errors=[{"path": [], "message": "Expected a JSON object"}])
    try:
        return ValidationResult(ok=True, value=schema.model_validate(payload))
    except ValidationError as exc:
        return ValidationResult(ok=False, errors=error_list(exc))


def validate_user_create(payload: Any) -> ValidationResult[UserCreate]:
    return validate(UserCreate, payload)


def validate_login(payload: Any) -> ValidationResult[LoginData]:
    return validate(LoginData, payload)


def validate_user_patch(payload: Any) -> ValidationResult[ProfileUpdate]:
    return validate(ProfileUpdate, payload)


def validate_item_create(payload: Any) -> ValidationResult[ItemCreate]:
    return validate(ItemCreate, payload)


def validate_item_patch(payload: Any) -> ValidationResult[ListingUpdate]:
    return validate(ListingUpdate, payload)


def validate_chat_create(payload: Any) -> ValidationResult[ChatCreate]:
    return validate(ChatCreate, payload)


def validate_message_create(payload: Any) -> ValidationResult[MessageCreate]:
    return validate(MessageCreate, payload)
