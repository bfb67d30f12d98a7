"""Digi Hash settings: environment variable names and defaults."""
import os
from typing import Optional

# prefix used by Create-React-App style bundlers.
FRAMEWORK_PREFIX = 'REACT_APP_'

SECRET_KEY_ENV = 'HOOK_SECRET_KEY'
SECRET_KEY_ALIAS = 'REACT_APP_HASH_SECRET_KEY'
ENABLE_HASH_ENV = 'ENABLE_HASH_DATA'
ENABLE_DECODE_ENV = 'ENABLE_DECODE_DATA'
WHITE_LIST_ENV = 'HASH_WHITE_LIST'
EXCLUDE_PATH_ENV = 'HASH_EXCLUDE_PATH'

DEFAULT_FLAG = 'false'
ENABLED_FLAG = 'true'

# field that carries the sealed envelope in request bodies and query params.
HASH_FIELD = 'hash'


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Read ``key`` or its ``REACT_APP_`` alias; empty values count as absent."""
    value = os.environ.get(key)
    if value:
        return value
    value = os.environ.get(f"{FRAMEWORK_PREFIX}{key}")
    if value:
        return value
    return default


def split_list(raw: Optional[str]) -> list[str]:
    """Split a comma-separated setting, dropping blanks."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(',') if item.strip()]
