"""JSON wire codec for the RPC service: pydantic model <-> bytes."""
from typing import Callable, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

SERVICE_NAME = "blog.BlogService"

M = TypeVar("M", bound=BaseModel)


class MalformedMessageError(Exception):
    """The payload is not valid JSON for the expected message."""


def method_path(method: str) -> str:
    return f"/{SERVICE_NAME}/{method}"


def serializer(message: BaseModel) -> bytes:
    return message.model_dump_json().encode("utf-8")


def deserializer(model: type[M]) -> Callable[[bytes], M]:
    def _decode(payload: bytes) -> M:
        return decode(model, payload)

    return _decode


def decode(model: type[M], payload: bytes) -> M:
    if not payload:
        return model()
    try:
        return model.model_validate_json(payload)
    except PydanticValidationError as exc:
        raise MalformedMessageError(str(exc)) from exc
