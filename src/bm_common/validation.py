"""Request parsing: turns pydantic failures into the domain ValidationError.

Everything a write sends to the ledger is parsed here first, so an invalid
request never reaches the store client.
"""

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.bm_common.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_request(model: type[ModelT], **data: Any) -> ModelT:
    try:
        return model(**data)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or model.__name__
        raise ValidationError(field, first["msg"]) from exc
