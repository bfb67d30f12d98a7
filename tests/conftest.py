"""Shared fixtures: isolate every test from the process environment."""
import pytest

from digi_hash.config import HashConfig

_ENV_NAMES = (
    'HOOK_SECRET_KEY',
    'REACT_APP_HOOK_SECRET_KEY',
    'REACT_APP_HASH_SECRET_KEY',
    'ENABLE_HASH_DATA',
    'REACT_APP_ENABLE_HASH_DATA',
    'ENABLE_DECODE_DATA',
    'REACT_APP_ENABLE_DECODE_DATA',
    'HASH_WHITE_LIST',
    'REACT_APP_HASH_WHITE_LIST',
    'HASH_EXCLUDE_PATH',
    'REACT_APP_HASH_EXCLUDE_PATH',
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove hash settings from the environment and skip .env loading."""
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr('digi_hash.config.load_dotenv', lambda *args, **kwargs: False)
    return monkeypatch


@pytest.fixture
def secret_key():
    return 'k1'


@pytest.fixture
def enabled_config(secret_key):
    """Configuration with both transforms switched on."""
    return HashConfig(
        secret_key=secret_key,
        enable_hash_data='true',
        enable_decode_data='true',
        white_list='10.0.0.1, trusted-service',
        exclude_path='/health,/api/public',
    )
