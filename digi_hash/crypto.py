"""
Digi Hash Crypto Core — Passphrase key derivation, AES encryption and armor.

Implements the OpenSSL ``enc`` passphrase scheme, which is also what CryptoJS
``AES.encrypt(text, passphrase)`` produces:

- Key derivation: EVP_BytesToKey(MD5, 1 iteration, 8-byte salt) → 32B key + 16B IV
- Cipher: AES-256-CBC with PKCS#7 padding
- Armor: base64(b"Salted__" | salt 8B | ciphertext)

The armor text is finally hex-encoded for transport.

Security Note:
    Never log passphrases, plaintext or ciphertext values.
    The scheme is unauthenticated; a wrong passphrase is detected only by
    invalid padding or undecodable plaintext.
"""
import os
import base64
import binascii

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

SALT_HEADER = b"Salted__"
SALT_SIZE = 8
KEY_LENGTH = 32  # AES-256
IV_LENGTH = 16
BLOCK_SIZE = 128  # AES block, in bits


# ---------------------------------------------------------------------------
# Key derivation
# ---------------------------------------------------------------------------

def evp_bytes_to_key(
    passphrase: bytes,
    salt: bytes,
    key_length: int = KEY_LENGTH,
    iv_length: int = IV_LENGTH,
) -> tuple[bytes, bytes]:
    """Derive key and IV the way OpenSSL's EVP_BytesToKey does with MD5.

    D_1 = MD5(passphrase | salt), D_i = MD5(D_{i-1} | passphrase | salt),
    concatenated until key_length + iv_length bytes are available.

    Args:
        passphrase: Secret passphrase bytes.
        salt: 8-byte salt.
        key_length: Size of the derived key.
        iv_length: Size of the derived IV.

    Returns:
        Tuple of (key, iv).
    """
    derived = b""
    block = b""
    while len(derived) < key_length + iv_length:
        digest = hashes.Hash(hashes.MD5())
        digest.update(block + passphrase + salt)
        block = digest.finalize()
        derived += block
    return derived[:key_length], derived[key_length:key_length + iv_length]


# ---------------------------------------------------------------------------
# Passphrase encryption (OpenSSL-compatible)
# ---------------------------------------------------------------------------

def encrypt_passphrase(plaintext: bytes, passphrase: str, salt: bytes = None) -> str:
    """Encrypt plaintext with a passphrase.

    Args:
        plaintext: Data to encrypt.
        passphrase: Secret passphrase.
        salt: Optional 8-byte salt, random when omitted.

    Returns:
        base64 armor text of ``Salted__`` + salt + ciphertext.
    """
    if salt is None:
        salt = os.urandom(SALT_SIZE)
    if len(salt) != SALT_SIZE:
        raise ValueError(f"salt must be {SALT_SIZE} bytes, got {len(salt)}")
    key, iv = evp_bytes_to_key(passphrase.encode("utf-8"), salt)
    padder = padding.PKCS7(BLOCK_SIZE).padder()
    padded = padder.update(plaintext) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ct = encryptor.update(padded) + encryptor.finalize()
    return base64.b64encode(SALT_HEADER + salt + ct).decode("ascii")


def decrypt_passphrase(armor: str, passphrase: str) -> bytes:
    """Decrypt base64 armor produced by :func:`encrypt_passphrase`.

    Args:
        armor: base64 text of ``Salted__`` + salt + ciphertext.
        passphrase: Secret passphrase.

    Returns:
        Decrypted plaintext bytes.

    Raises:
        ValueError: If the armor is malformed or the padding is invalid
            (usually a wrong passphrase).
    """
    try:
        raw = base64.b64decode(armor, validate=True)
    except binascii.Error as err:
        raise ValueError(f"ciphertext is not valid base64: {err}") from err
    if not raw.startswith(SALT_HEADER):
        raise ValueError("ciphertext is missing the Salted__ header")
    _min = len(SALT_HEADER) + SALT_SIZE
    ct = raw[_min:]
    if len(raw) < _min or not ct or len(ct) % (BLOCK_SIZE // 8):
        raise ValueError(
            f"ciphertext has invalid length: {len(raw)} bytes"
        )
    salt = raw[len(SALT_HEADER):_min]
    key, iv = evp_bytes_to_key(passphrase.encode("utf-8"), salt)
    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ct) + decryptor.finalize()
    unpadder = padding.PKCS7(BLOCK_SIZE).unpadder()
    return unpadder.update(padded) + unpadder.finalize()


# ---------------------------------------------------------------------------
# Hex transport encoding
# ---------------------------------------------------------------------------

def to_hex(text: str) -> str:
    """Hex-encode the UTF-8 bytes of ``text``."""
    return text.encode("utf-8").hex()


def from_hex(hex_text: str) -> str:
    """Decode a hex string back to text.

    Raises:
        TypeError: If ``hex_text`` is not a string.
        ValueError: If ``hex_text`` is not valid hex or not UTF-8.
    """
    if not isinstance(hex_text, str):
        raise TypeError(
            f"expected a hex string, got {type(hex_text).__name__}"
        )
    return bytes.fromhex(hex_text).decode("utf-8")
