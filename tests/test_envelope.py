"""
Tests for the envelope codec.

Tests cover:
- seal / unseal round trips for every JSON value type
- Wire format (hex of OpenSSL base64 armor)
- Ok / Err results from try_seal / try_unseal
- Failures are logged and the original input is returned
- Empty decrypted text is returned without JSON parsing
"""
import base64
import logging

import pytest

from digi_hash.crypto import encrypt_passphrase, decrypt_passphrase
from digi_hash.envelope import (
    Ok,
    Err,
    seal,
    unseal,
    try_seal,
    try_unseal,
    serialize_value,
    deserialize_value,
)


@pytest.fixture
def message():
    return {'message': 'Hello, world!'}


# --- Test Serialization ---

class TestSerialization:
    """Tests for serialize_value / deserialize_value."""

    def test_compact_json(self):
        """Test output has no insignificant whitespace."""
        assert serialize_value({'a': [1, 2], 'b': None}) == '{"a":[1,2],"b":null}'

    def test_non_string_keys(self):
        """Test integer keys are written as strings."""
        assert serialize_value({1: 'one'}) == '{"1":"one"}'

    def test_unicode_is_kept(self):
        """Test non-ASCII text is not escaped."""
        assert serialize_value('ñandú') == '"ñandú"'

    def test_empty_text(self):
        """Test empty text skips JSON parsing."""
        assert deserialize_value('') == ''


# --- Test Round Trip ---

class TestRoundTrip:
    """Tests for unseal(seal(v, k), k) == v."""

    @pytest.mark.parametrize('value', [
        {'message': 'Hello, world!'},
        [1, 'two', 3.5, None, True],
        'plain string',
        '',
        0,
        -42,
        3.25,
        True,
        False,
        None,
        {},
        [],
        {'nested': {'list': [{'a': 1}], 'unicode': 'ü€'}},
    ])
    def test_round_trip(self, value):
        """Test a sealed value opens to an equal value."""
        sealed = seal(value, 'k1')
        assert isinstance(sealed, str)
        assert unseal(sealed, 'k1') == value

    def test_example_message(self, message):
        """Test the Hello world message round trip."""
        sealed = seal(message, 'k1')
        assert sealed != message
        assert unseal(sealed, 'k1') == {'message': 'Hello, world!'}


# --- Test Wire Format ---

class TestWireFormat:
    """Tests for the hex envelope layout."""

    def test_hex_of_openssl_armor(self, message):
        """Test the envelope is lowercase hex of a Salted__ base64 armor."""
        sealed = seal(message, 'k1')
        assert sealed == sealed.lower()
        armor = bytes.fromhex(sealed).decode('ascii')
        assert base64.b64decode(armor).startswith(b'Salted__')
        assert decrypt_passphrase(armor, 'k1') == b'{"message":"Hello, world!"}'

    def test_opens_foreign_envelope(self):
        """Test an envelope built outside seal() is opened."""
        armor = encrypt_passphrase(b'{"total":3,"ids":[1,2,3]}', 'shared')
        envelope = armor.encode('ascii').hex()
        assert unseal(envelope, 'shared') == {'total': 3, 'ids': [1, 2, 3]}

    def test_encrypted_empty_text(self):
        """Test an envelope of empty text opens to an empty string."""
        envelope = encrypt_passphrase(b'', 'k1').encode('ascii').hex()
        assert unseal(envelope, 'k1') == ''


# --- Test Results ---

class TestResults:
    """Tests for try_seal / try_unseal results."""

    def test_try_seal_ok(self, message):
        """Test try_seal returns Ok with a hex string."""
        result = try_seal(message, 'k1')
        assert isinstance(result, Ok)
        int(result.value, 16)

    def test_try_seal_serialize_error(self):
        """Test non-JSON values give a serialize Err."""
        result = try_seal({'obj': object()}, 'k1')
        assert isinstance(result, Err)
        assert result.reason == 'serialize'
        assert isinstance(result.error, TypeError)

    def test_try_seal_encrypt_error(self):
        """Test a missing key gives an encrypt Err."""
        result = try_seal({'a': 1}, None)
        assert isinstance(result, Err)
        assert result.reason == 'encrypt'

    def test_try_unseal_ok(self, message):
        """Test try_unseal returns Ok with the value."""
        result = try_unseal(seal(message, 'k1'), 'k1')
        assert result == Ok(message)

    def test_try_unseal_bad_hex(self):
        """Test truncated hex gives a hex Err."""
        result = try_unseal('abc', 'k1')
        assert isinstance(result, Err)
        assert result.reason == 'hex'

    def test_try_unseal_not_a_string(self):
        """Test non-string input gives a hex Err."""
        result = try_unseal({'hash': 'x'}, 'k1')
        assert isinstance(result, Err)
        assert result.reason == 'hex'

    def test_try_unseal_bad_armor(self):
        """Test valid hex of non-armor text gives a decrypt Err."""
        result = try_unseal('hello'.encode().hex(), 'k1')
        assert isinstance(result, Err)
        assert result.reason == 'decrypt'

    def test_try_unseal_not_json(self):
        """Test decrypted non-JSON text gives a deserialize Err."""
        envelope = encrypt_passphrase(b'not json', 'k1').encode('ascii').hex()
        result = try_unseal(envelope, 'k1')
        assert isinstance(result, Err)
        assert result.reason == 'deserialize'

    def test_try_unseal_wrong_key(self, message):
        """Test the wrong key never yields Ok."""
        result = try_unseal(seal(message, 'k1'), 'wrong-key')
        assert isinstance(result, Err)


# --- Test Swallowed Failures ---

class TestFailuresReturnInput:
    """Tests for seal / unseal returning their input on failure."""

    def test_wrong_key_returns_input(self, message, caplog):
        """Test opening with the wrong key returns the envelope unchanged."""
        sealed = seal(message, 'k1')
        with caplog.at_level(logging.ERROR, logger='digi_hash.envelope'):
            assert unseal(sealed, 'wrong-key') == sealed
        assert 'Error decoding data' in caplog.text

    def test_truncated_hex_returns_input(self, message, caplog):
        """Test corrupted hex does not raise."""
        corrupted = seal(message, 'k1')[:-1]
        with caplog.at_level(logging.ERROR, logger='digi_hash.envelope'):
            assert unseal(corrupted, 'k1') == corrupted
        assert caplog.records
        assert caplog.records[0].levelno == logging.ERROR

    def test_unserializable_returns_input(self, caplog):
        """Test a value that cannot be serialized is returned as-is."""
        value = {'when': object()}
        with caplog.at_level(logging.ERROR, logger='digi_hash.envelope'):
            assert seal(value, 'k1') is value
        assert 'Error hashing data' in caplog.text

    def test_secret_is_not_logged(self, message, caplog):
        """Test neither key nor payload appears in the log."""
        sealed = seal(message, 'k1-super-secret')
        with caplog.at_level(logging.ERROR, logger='digi_hash.envelope'):
            unseal(sealed, 'other-secret')
        assert 'k1-super-secret' not in caplog.text
        assert 'Hello' not in caplog.text
