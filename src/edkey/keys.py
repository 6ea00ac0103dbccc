"""Ed25519 key pairs as raw byte buffers."""

import logging
from dataclasses import dataclass

import nacl.signing
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from edkey.errors import UnsupportedPublicKeyType

logger = logging.getLogger(__name__)

SEED_SIZE = 32
PUBLIC_KEY_SIZE = 32
PRIVATE_KEY_SIZE = 64


@dataclass(frozen=True)
class KeyPair:
    """
    Ed25519 key pair in the expanded representation.

    ``private`` is the 32-byte seed followed by the 32-byte public key, the
    layout OpenSSH stores in the private key record.
    """
    public: bytes
    private: bytes

    @property
    def seed(self) -> bytes:
        return self.private[:SEED_SIZE]

    def validate(self) -> None:
        """Raise ``UnsupportedPublicKeyType`` unless this has the Ed25519 shape."""
        if len(self.public) != PUBLIC_KEY_SIZE:
            raise UnsupportedPublicKeyType(
                f"Ed25519 public key must be {PUBLIC_KEY_SIZE} bytes, got {len(self.public)}"
            )
        if len(self.private) != PRIVATE_KEY_SIZE:
            raise UnsupportedPublicKeyType(
                f"Ed25519 private key must be {PRIVATE_KEY_SIZE} bytes, got {len(self.private)}"
            )
        if self.private[SEED_SIZE:] != self.public:
            raise UnsupportedPublicKeyType(
                "Public key does not match the public half of the private key"
            )

    @classmethod
    def from_private_bytes(cls, private: bytes) -> 'KeyPair':
        """
        Split an expanded 64-byte private key.

        The public key is taken from the trailing 32 bytes as is; nothing is
        derived from the seed.
        """
        private = bytes(private)
        if len(private) != PRIVATE_KEY_SIZE:
            raise UnsupportedPublicKeyType(
                f"Ed25519 private key must be {PRIVATE_KEY_SIZE} bytes, got {len(private)}"
            )
        return cls(public=private[SEED_SIZE:], private=private)

    @classmethod
    def from_seed(cls, seed: bytes) -> 'KeyPair':
        """Derive the key pair for a 32-byte seed."""
        if len(seed) != SEED_SIZE:
            raise ValueError(f"Ed25519 seed must be {SEED_SIZE} bytes, got {len(seed)}")
        return cls.from_key(ed25519.Ed25519PrivateKey.from_private_bytes(bytes(seed)))

    @classmethod
    def generate(cls) -> 'KeyPair':
        """Generate a new random key pair."""
        logger.debug("Generating new Ed25519 keypair")
        return cls.from_key(nacl.signing.SigningKey.generate())

    @classmethod
    def from_key(cls, key) -> 'KeyPair':
        """
        Build a key pair from a library key object.

        Args:
            key: A ``KeyPair``, a ``cryptography`` private key, a PyNaCl
                ``SigningKey``, or a 64-byte expanded private key

        Raises:
            UnsupportedPublicKeyType: if the key is not an Ed25519 key
        """
        if isinstance(key, KeyPair):
            return key
        if isinstance(key, (bytes, bytearray, memoryview)):
            return cls.from_private_bytes(key)
        if isinstance(key, nacl.signing.SigningKey):
            seed = key.encode()
            public = key.verify_key.encode()
            return cls(public=public, private=seed + public)

        public_key_fn = getattr(key, "public_key", None)
        if public_key_fn is None:
            raise UnsupportedPublicKeyType(f"Unexpected key type {type(key).__name__}")
        public_key = public_key_fn()
        if not isinstance(key, ed25519.Ed25519PrivateKey) or \
                not isinstance(public_key, ed25519.Ed25519PublicKey):
            raise UnsupportedPublicKeyType(
                f"Unexpected public key type {type(public_key).__name__}"
            )

        seed = key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption()
        )
        public = public_key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw
        )
        return cls(public=public, private=seed + public)
