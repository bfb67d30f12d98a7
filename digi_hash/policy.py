"""
Policy Gate — decide when payloads are sealed or opened.

Server side:
- ``server_hash_data(data, sender_address)``: seal outgoing data if enabled
- ``server_decode_data(data, sender_address, path)``: open incoming data
  unless disabled, whitelisted or on an excluded path

Client side:
- ``client_hash_data(request, ...)``: seal request body (post/patch) or
  query params (get/delete) under the ``hash`` field
- ``client_decode_data(response, ...)``: open the encrypted part of a
  response, located by :class:`ResponseShape`
"""
import logging
from enum import Enum
from collections.abc import Mapping
from typing import Any, Optional, Union

from .conf import HASH_FIELD, ENABLED_FLAG
from .config import HashConfig
from .envelope import seal, unseal

logger = logging.getLogger("digi_hash.policy")

BODY_METHODS = frozenset({"post", "patch"})
QUERY_METHODS = frozenset({"get", "delete"})


class ResponseShape(Enum):
    """Where the sealed payload sits inside a response descriptor."""
    PAGINATED = "paginated"  # response["data"]["data"], with a "total" count
    NESTED = "nested"        # response["data"]["data"]
    SCALAR = "scalar"        # response["data"]
    PASSTHROUGH = "passthrough"


def _is_enabled(flag: Union[bool, str, None]) -> bool:
    return flag is True or flag == ENABLED_FLAG


def detect_response_shape(response: Any) -> ResponseShape:
    """Inspect a response descriptor once and name where its payload is."""
    if not isinstance(response, Mapping):
        return ResponseShape.PASSTHROUGH
    payload = response.get("data")
    if isinstance(payload, Mapping):
        if payload.get("total"):
            return ResponseShape.PAGINATED
        if payload.get("data"):
            return ResponseShape.NESTED
        return ResponseShape.PASSTHROUGH
    if isinstance(payload, (list, tuple)):
        # lists never carry a nested "data" field
        return ResponseShape.PASSTHROUGH
    if payload:
        return ResponseShape.SCALAR
    return ResponseShape.PASSTHROUGH


# ---------------------------------------------------------------------------
# Server side
# ---------------------------------------------------------------------------

def server_hash_data(
    data: Any,
    sender_address: str = '',
    config: Optional[HashConfig] = None,
) -> Any:
    """Seal outgoing data when ENABLE_HASH_DATA is "true".

    Args:
        data: JSON-serializable value.
        sender_address: Caller identity (kept for symmetry with decoding).
        config: Policy configuration, read from environment when omitted.

    Returns:
        Hex envelope if enabled, otherwise ``data`` unchanged.

    Raises:
        SecretKeyNotFound: If enabled and no secret key is configured.
    """
    if config is None:
        config = HashConfig.from_env()
    if not config.hash_enabled:
        return data
    return seal(data, config.require_secret_key())


def server_decode_data(
    data: Any,
    sender_address: str = '',
    path: Optional[str] = None,
    config: Optional[HashConfig] = None,
) -> Any:
    """Open incoming data when ENABLE_DECODE_DATA is "true".

    Whitelisted senders and excluded paths are passed through untouched.

    Args:
        data: Hex envelope.
        sender_address: Caller identity checked against HASH_WHITE_LIST.
        path: Request path checked against HASH_EXCLUDE_PATH.
        config: Policy configuration, read from environment when omitted.

    Returns:
        Decoded value, or ``data`` unchanged when bypassed or undecodable.

    Raises:
        SecretKeyNotFound: If decoding applies and no secret key is configured.
    """
    if config is None:
        config = HashConfig.from_env()
    if not config.decode_enabled:
        return data
    if config.is_whitelisted(sender_address):
        logger.debug("Sender %s is whitelisted, skipping decode", sender_address)
        return data
    if config.is_excluded(path):
        logger.debug("Path %s is excluded, skipping decode", path)
        return data
    return unseal(data, config.require_secret_key())


# ---------------------------------------------------------------------------
# Client side
# ---------------------------------------------------------------------------

def client_hash_data(
    request: Mapping,
    enable_hash_data: Union[bool, str, None],
    secret_key: str,
) -> Mapping:
    """Seal the payload of an outgoing request descriptor.

    ``post``/``patch`` requests get ``data={"hash": ...}``;
    ``get``/``delete`` requests get ``params={"hash": ...}``.

    Returns:
        A shallow copy with the sealed field, or ``request`` itself when
        disabled or for any other method.
    """
    if not _is_enabled(enable_hash_data):
        return request
    method = request.get("method")
    if method in BODY_METHODS:
        return {**request, "data": {HASH_FIELD: seal(request.get("data"), secret_key)}}
    if method in QUERY_METHODS:
        return {**request, "params": {HASH_FIELD: seal(request.get("params"), secret_key)}}
    return request


def client_decode_data(
    response: Any,
    enable_decode_data: Union[bool, str, None],
    secret_key: str,
    shape: Optional[ResponseShape] = None,
) -> Any:
    """Open the sealed part of a response descriptor in place.

    Args:
        response: Mapping with a ``data`` entry.
        enable_decode_data: True or "true" to decode.
        secret_key: Secret passphrase.
        shape: Where the sealed payload is; detected when omitted.
            A shape that does not fit the response is treated as
            passthrough.

    Returns:
        The same ``response`` object.
    """
    if not _is_enabled(enable_decode_data):
        return response
    if shape is None:
        shape = detect_response_shape(response)
    if not isinstance(response, Mapping):
        return response
    payload = response.get("data")
    if shape in (ResponseShape.PAGINATED, ResponseShape.NESTED):
        if not isinstance(payload, Mapping):
            logger.debug("Response data is not an object, ignoring %s shape", shape.value)
            return response
        payload["data"] = unseal(payload.get("data"), secret_key)
    elif shape is ResponseShape.SCALAR:
        response["data"] = unseal(payload, secret_key)
    return response


class DigiHash:
    """Policy gate bound to one configuration.

    Build it once at startup and share it::

        hasher = DigiHash(HashConfig.from_env())
        body = hasher.hash_data({"message": "Hello"})
    """

    def __init__(self, config: Optional[HashConfig] = None):
        self.config = config if config is not None else HashConfig.from_env()

    def __repr__(self) -> str:
        return (
            f"<DigiHash hash={self.config.enable_hash_data} "
            f"decode={self.config.enable_decode_data}>"
        )

    def hash_data(self, data: Any, sender_address: str = '') -> Any:
        return server_hash_data(data, sender_address, config=self.config)

    def decode_data(
        self, data: Any, sender_address: str = '', path: Optional[str] = None
    ) -> Any:
        return server_decode_data(data, sender_address, path, config=self.config)

    def hash_request(self, request: Mapping) -> Mapping:
        """Client request transform using this configuration."""
        if not self.config.hash_enabled:
            return request
        return client_hash_data(
            request, self.config.enable_hash_data, self.config.require_secret_key()
        )

    def decode_response(self, response: Any, shape: Optional[ResponseShape] = None) -> Any:
        """Client response transform using this configuration."""
        if not self.config.decode_enabled:
            return response
        return client_decode_data(
            response,
            self.config.enable_decode_data,
            self.config.require_secret_key(),
            shape=shape,
        )
