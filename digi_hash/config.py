"""
Digi Hash Configuration — Secret key loading and validated policy settings.

Reads settings from environment variables (each one also accepted with the
``REACT_APP_`` prefix):
    HOOK_SECRET_KEY / REACT_APP_HASH_SECRET_KEY = <passphrase>
    ENABLE_HASH_DATA = "true" | "false"
    ENABLE_DECODE_DATA = "true" | "false"
    HASH_WHITE_LIST = <comma separated caller identities>
    HASH_EXCLUDE_PATH = <comma separated request paths>

Security Note:
    Never log the secret key. Only log whether it is present.
"""
import logging
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

from .conf import (
    SECRET_KEY_ENV,
    SECRET_KEY_ALIAS,
    ENABLE_HASH_ENV,
    ENABLE_DECODE_ENV,
    WHITE_LIST_ENV,
    EXCLUDE_PATH_ENV,
    DEFAULT_FLAG,
    ENABLED_FLAG,
    get_env,
    split_list,
)
from .exceptions import SecretKeyNotFound

logger = logging.getLogger("digi_hash.config")


class HashConfig(BaseModel):
    """Validated, immutable policy configuration."""

    secret_key: Optional[str] = Field(default=None, repr=False)
    enable_hash_data: str = Field(default=DEFAULT_FLAG)
    enable_decode_data: str = Field(default=DEFAULT_FLAG)
    white_list: tuple[str, ...] = Field(default_factory=tuple)
    exclude_path: tuple[str, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    @field_validator("white_list", "exclude_path", mode="before")
    @classmethod
    def split_csv(cls, v: Union[str, list, tuple, set, None]) -> tuple[str, ...]:
        """Accept comma-separated strings as well as sequences."""
        if v is None:
            return ()
        if isinstance(v, str):
            return tuple(split_list(v))
        return tuple(str(item).strip() for item in v if str(item).strip())

    @field_validator("enable_hash_data", "enable_decode_data", mode="before")
    @classmethod
    def flag_as_str(cls, v: Union[str, bool, None]) -> str:
        """Booleans are stored as their lowercase literal."""
        if v is None:
            return DEFAULT_FLAG
        if isinstance(v, bool):
            return ENABLED_FLAG if v else DEFAULT_FLAG
        return v

    @property
    def hash_enabled(self) -> bool:
        return self.enable_hash_data == ENABLED_FLAG

    @property
    def decode_enabled(self) -> bool:
        return self.enable_decode_data == ENABLED_FLAG

    def require_secret_key(self) -> str:
        """Return the secret key.

        Raises:
            SecretKeyNotFound: If no secret key was configured.
        """
        if not self.secret_key:
            raise SecretKeyNotFound()
        return self.secret_key

    def is_whitelisted(self, sender_address: Optional[str]) -> bool:
        return sender_address is not None and sender_address in self.white_list

    def is_excluded(self, path: Optional[str]) -> bool:
        return path is not None and path in self.exclude_path

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "HashConfig":
        """Create HashConfig by loading values from environment.

        Args:
            dotenv: load the first ``.env`` found from the working
                directory upwards; variables already set in the
                process take precedence.

        Returns:
            Populated HashConfig instance.
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True), override=False)
        secret_key = get_env(SECRET_KEY_ENV, '') or get_env(SECRET_KEY_ALIAS, '')
        config = cls(
            secret_key=secret_key or None,
            enable_hash_data=get_env(ENABLE_HASH_ENV, DEFAULT_FLAG),
            enable_decode_data=get_env(ENABLE_DECODE_ENV, DEFAULT_FLAG),
            white_list=get_env(WHITE_LIST_ENV, ''),
            exclude_path=get_env(EXCLUDE_PATH_ENV, ''),
        )
        logger.debug(
            "Loaded hash config: hash=%s decode=%s key=%s whitelist=%d excluded=%d",
            config.enable_hash_data,
            config.enable_decode_data,
            "set" if config.secret_key else "missing",
            len(config.white_list),
            len(config.exclude_path),
        )
        return config
