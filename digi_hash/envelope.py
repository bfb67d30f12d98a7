"""
Envelope Codec — seal and unseal JSON values.

- ``seal``:   value → JSON → AES (passphrase) → hex
- ``unseal``: hex → AES (passphrase) → JSON → value

``try_seal`` / ``try_unseal`` report failures as :class:`Err` results;
``seal`` / ``unseal`` log those failures and hand back the original input.

Security Note:
    Never log plaintext or ciphertext values. Only log failure reasons.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

import orjson

from .crypto import (
    encrypt_passphrase,
    decrypt_passphrase,
    to_hex,
    from_hex,
)

logger = logging.getLogger("digi_hash.envelope")

# JSON.stringify coerces object keys to strings; orjson needs an option for it.
_DUMPS_OPTIONS = orjson.OPT_NON_STR_KEYS


@dataclass(frozen=True)
class Ok:
    """Successful codec result."""
    value: Any


@dataclass(frozen=True)
class Err:
    """Failed codec result."""
    reason: str
    error: Optional[BaseException] = None


Result = Union[Ok, Err]


# ---------------------------------------------------------------------------
# Value serialization
# ---------------------------------------------------------------------------

def serialize_value(value: Any) -> str:
    """Serialize a value to compact JSON text.

    Args:
        value: JSON-serializable value (dict, list, str, int, float, bool, None).

    Returns:
        JSON text without insignificant whitespace.
    """
    return orjson.dumps(value, option=_DUMPS_OPTIONS).decode("utf-8")


def deserialize_value(text: str) -> Any:
    """Parse JSON text; an empty string is returned as-is."""
    if text == "":
        return text
    return orjson.loads(text)


# ---------------------------------------------------------------------------
# Result-returning codec
# ---------------------------------------------------------------------------

def try_seal(value: Any, key: str) -> Result:
    """Serialize, encrypt and hex-encode ``value``.

    Args:
        value: JSON-serializable value.
        key: Secret passphrase.

    Returns:
        Ok(hex string) or Err describing the failing step.
    """
    try:
        text = serialize_value(value)
    except TypeError as err:
        return Err("serialize", err)
    try:
        armor = encrypt_passphrase(text.encode("utf-8"), key)
    except (TypeError, ValueError, AttributeError) as err:
        return Err("encrypt", err)
    return Ok(to_hex(armor))


def try_unseal(hex_text: Any, key: str) -> Result:
    """Hex-decode, decrypt and deserialize ``hex_text``.

    Args:
        hex_text: Sealed envelope.
        key: Secret passphrase.

    Returns:
        Ok(value) or Err describing the failing step.
    """
    try:
        armor = from_hex(hex_text)
    except (TypeError, ValueError) as err:
        return Err("hex", err)
    try:
        plaintext = decrypt_passphrase(armor, key)
    except (TypeError, ValueError, AttributeError) as err:
        return Err("decrypt", err)
    try:
        text = plaintext.decode("utf-8")
    except UnicodeDecodeError as err:
        return Err("decrypt", err)
    try:
        return Ok(deserialize_value(text))
    except orjson.JSONDecodeError as err:
        return Err("deserialize", err)


# ---------------------------------------------------------------------------
# Boundary adapters
# ---------------------------------------------------------------------------

def seal(value: Any, key: str) -> Any:
    """Seal ``value``; on failure log and return ``value`` unchanged."""
    result = try_seal(value, key)
    if isinstance(result, Err):
        logger.error("Error hashing data (%s): %s", result.reason, result.error)
        return value
    return result.value


def unseal(hex_text: Any, key: str) -> Any:
    """Open a sealed envelope; on failure log and return the input unchanged."""
    result = try_unseal(hex_text, key)
    if isinstance(result, Err):
        logger.error("Error decoding data (%s): %s", result.reason, result.error)
        return hex_text
    return result.value
