"""Tests for KeyPair construction."""

import nacl.signing
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519
from edkey.errors import UnsupportedPublicKeyType
from edkey.keys import KeyPair


@pytest.fixture
def signing_key():
    return nacl.signing.SigningKey(bytes(range(32)))


class TestKeyPair:
    """Test cases for KeyPair."""

    def test_from_private_bytes_keeps_tail_verbatim(self):
        keypair = KeyPair.from_private_bytes(bytes(64))
        assert keypair.public == bytes(32)
        assert keypair.private == bytes(64)
        assert keypair.seed == bytes(32)

    def test_from_private_bytes_wrong_length(self):
        with pytest.raises(UnsupportedPublicKeyType, match="64 bytes"):
            KeyPair.from_private_bytes(bytes(32))

    def test_from_nacl_signing_key(self, signing_key):
        keypair = KeyPair.from_key(signing_key)
        assert keypair.seed == bytes(range(32))
        assert keypair.public == signing_key.verify_key.encode()
        assert keypair.private == bytes(range(32)) + keypair.public

    def test_from_cryptography_key_matches_nacl(self, signing_key):
        crypto_key = ed25519.Ed25519PrivateKey.from_private_bytes(bytes(range(32)))
        assert KeyPair.from_key(crypto_key) == KeyPair.from_key(signing_key)

    def test_from_seed(self, signing_key):
        assert KeyPair.from_seed(bytes(range(32))) == KeyPair.from_key(signing_key)

    def test_from_seed_wrong_length(self):
        with pytest.raises(ValueError, match="32 bytes"):
            KeyPair.from_seed(b"short")

    def test_from_key_passthrough(self):
        keypair = KeyPair.from_private_bytes(bytes(64))
        assert KeyPair.from_key(keypair) is keypair

    def test_from_key_rejects_other_algorithms(self):
        ec_key = ec.generate_private_key(ec.SECP256R1())
        with pytest.raises(UnsupportedPublicKeyType, match="Unexpected public key type"):
            KeyPair.from_key(ec_key)

    def test_from_key_rejects_public_only_objects(self):
        with pytest.raises(UnsupportedPublicKeyType, match="Unexpected key type"):
            KeyPair.from_key(object())

    def test_generate(self):
        keypair = KeyPair.generate()
        keypair.validate()
        derived = ed25519.Ed25519PrivateKey.from_private_bytes(keypair.seed).public_key()
        assert derived.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw
        ) == keypair.public

    def test_validate_mismatched_public(self):
        keypair = KeyPair(public=b"\x01" * 32, private=bytes(64))
        with pytest.raises(UnsupportedPublicKeyType, match="does not match"):
            keypair.validate()

    def test_validate_wrong_sizes(self):
        with pytest.raises(UnsupportedPublicKeyType, match="public key must be 32"):
            KeyPair(public=bytes(31), private=bytes(64)).validate()
        with pytest.raises(UnsupportedPublicKeyType, match="private key must be 64"):
            KeyPair(public=bytes(32), private=bytes(63)).validate()
