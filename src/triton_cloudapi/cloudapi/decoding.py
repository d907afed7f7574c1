"""Response classification and typed decoding.

Turns a raw HTTP response into either a :class:`Success` holding a decoded
value or a :class:`ServerError` holding the server's error mapping. Field
names are normalized before decoding, see :mod:`.normalization`.
"""

import functools
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeAlias, TypeVar, Union

import pydantic
import structlog

from .errors import DecodeError
from .normalization import normalize_keys, parse_json

logger = structlog.get_logger(__name__)

T = TypeVar("T")

SUCCESS_STATUSES = frozenset({200, 204})


@dataclass(frozen=True)
class RawResponse:
    """Status, body and headers exactly as received from the transport."""

    status_code: int
    body: bytes | str = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        """Body decoded as UTF-8.

        Raises:
            DecodeError: If the body is not valid UTF-8.
        """
        if isinstance(self.body, str):
            return self.body
        try:
            return self.body.decode("utf-8")
        except UnicodeDecodeError as error:
            msg = f"Response body is not valid UTF-8: {error}"
            raise DecodeError(msg, raw=self.body) from error


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class ServerError:
    """Error reported by the server for a non-2xx response.

    ``body`` is the decoded error payload as the server sent it (after field
    name normalization); its shape varies between endpoints.
    """

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def code(self) -> str | None:
        return self.body.get("code")

    @property
    def message(self) -> str | None:
        return self.body.get("message")


DecodedResult: TypeAlias = Union[Success[T], ServerError]


@functools.cache
def _adapter(shape: Any) -> pydantic.TypeAdapter:
    return pydantic.TypeAdapter(shape)


def _validate(tree: Any, shape: Any, raw: str) -> Any:
    if shape is None:
        return tree
    try:
        return _adapter(shape).validate_python(tree)
    except pydantic.ValidationError as error:
        logger.error(
            "Response does not match expected shape",
            shape=getattr(shape, "__name__", str(shape)),
            error_count=error.error_count(),
        )
        msg = f"Response does not match {shape}: {error}"
        raise DecodeError(msg, raw=raw) from error


def decode(tree_or_text: Any, shape: Any = None) -> Any:
    """Decode normalized JSON text, or an already parsed tree, into ``shape``.

    Args:
        tree_or_text: Response body text, or the value ``json.loads`` gave
            for it. Trees go through key normalization, which is a no-op on
            trees that are already normalized.
        shape: A model class, ``list[Model]``, or None for the plain JSON
            value.

    Returns:
        The decoded value, or None for an empty body.

    Raises:
        DecodeError: If the text is not JSON or does not fit the shape.
    """
    if isinstance(tree_or_text, str):
        if not tree_or_text.strip():
            return None
        return _validate(parse_json(tree_or_text), shape, tree_or_text)

    tree = normalize_keys(tree_or_text)
    raw = json.dumps(tree_or_text, ensure_ascii=False, default=str)
    return _validate(tree, shape, raw)


def classify_and_decode(raw: RawResponse, shape: Any = None) -> DecodedResult:
    """Classify a response by status and decode its body.

    200 and 204 decode the body into ``shape``; an empty body gives
    ``Success(None)``. Any other status gives a ServerError with the error
    payload as a plain mapping.

    Raises:
        DecodeError: If the body cannot be decoded. This is distinct from a
            ServerError and always carries the raw text.
    """
    text = raw.text

    if raw.status_code in SUCCESS_STATUSES:
        if not text.strip():
            return Success(None)
        tree = normalize_keys(parse_json(text))
        return Success(_validate(tree, shape, text))

    if not text.strip():
        return ServerError(status_code=raw.status_code)

    tree = normalize_keys(parse_json(text))
    if not isinstance(tree, dict):
        msg = f"Error response with status {raw.status_code} is not a JSON object"
        raise DecodeError(msg, raw=text)
    return ServerError(status_code=raw.status_code, body=tree)


def classify(raw: RawResponse) -> DecodedResult:
    """Classify a response without a target shape."""
    return classify_and_decode(raw)
