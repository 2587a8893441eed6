from typing import Iterable

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel
        use_enum_values = True


def dump(schema, obj) -> dict:
    """Serialize an ORM object (or dict) through a response schema."""
    return schema.model_validate(obj).model_dump(by_alias=True, mode="json")


def changes(payload: BaseModel, nullable: Iterable[str] = ()) -> dict:
    """Fields the client actually sent, ready for setattr on the ORM row.

    An explicit null clears a field only when it is listed in `nullable`;
    for required columns it is ignored.
    """
    clearable = set(nullable)
    sent = payload.model_dump(exclude_unset=True)
    return {field: value for field, value in sent.items() if value is not None or field in clearable}
