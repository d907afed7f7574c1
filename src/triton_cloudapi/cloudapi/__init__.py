"""Triton CloudAPI client package.

Provides request signing, response normalization and typed decoding for the
Triton CloudAPI, plus a thin HTTP client exposing one method per operation.

Exports:
    CloudApiClient: HTTP client with signing, transport and decoding.
    Credential: Endpoint, account, key name and private key.
    types: Module containing Pydantic models for API resources.
    sign: Build fresh authentication headers for one request.
    normalize: Rename inconsistent wire field names in a JSON body.
    classify_and_decode: Turn a raw response into Success or ServerError.
"""

from . import types
from .client import DEFAULT_LOGIN, DEFAULT_TIMEOUT, CloudApiClient
from .decoding import (
    DecodedResult,
    RawResponse,
    ServerError,
    Success,
    classify,
    classify_and_decode,
    decode,
)
from .errors import CloudApiError, DecodeError, SigningError, TransportError
from .normalization import normalize, normalize_keys
from .signing import Credential, SignedHeaderSet, sign

__all__ = [
    "DEFAULT_LOGIN",
    "DEFAULT_TIMEOUT",
    "CloudApiClient",
    "CloudApiError",
    "Credential",
    "DecodeError",
    "DecodedResult",
    "RawResponse",
    "ServerError",
    "SignedHeaderSet",
    "SigningError",
    "Success",
    "TransportError",
    "classify",
    "classify_and_decode",
    "decode",
    "normalize",
    "normalize_keys",
    "sign",
    "types",
]
