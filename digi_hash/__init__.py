"""Digi Hash — Optional encryption of JSON payloads exchanged over HTTP.

Payloads are sealed as hex strings wrapping OpenSSL-compatible
(CryptoJS ``AES.encrypt``) passphrase ciphertext.
"""

from .version import __version__
from .config import HashConfig
from .exceptions import DigiHashError, SecretKeyNotFound
from .envelope import seal, unseal, try_seal, try_unseal, Ok, Err
from .policy import (
    DigiHash,
    ResponseShape,
    detect_response_shape,
    server_hash_data,
    server_decode_data,
    client_hash_data,
    client_decode_data,
)

__all__ = [
    "__version__",
    "HashConfig",
    "DigiHashError",
    "SecretKeyNotFound",
    "seal",
    "unseal",
    "try_seal",
    "try_unseal",
    "Ok",
    "Err",
    "DigiHash",
    "ResponseShape",
    "detect_response_shape",
    "server_hash_data",
    "server_decode_data",
    "client_hash_data",
    "client_decode_data",
]
