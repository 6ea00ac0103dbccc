"""Decode OpenSSH private key files written by edkey.

Only what the writer produces is accepted: a single unencrypted Ed25519 key.
"""

import logging
from dataclasses import dataclass

from edkey.errors import KeyFormatError
from edkey.fingerprint import fingerprint_sha256
from edkey.keyblock import CIPHER_NONE, KDF_NONE, KEY_ALGO_ED25519, MAGIC, public_key_blob
from edkey.keys import PRIVATE_KEY_SIZE, PUBLIC_KEY_SIZE, SEED_SIZE, KeyPair
from edkey.padding import BLOCK_SIZE, is_valid_padding
from edkey.pem import OPENSSH_PRIVATE_KEY, dearmor
from edkey.wire import WireReader

logger = logging.getLogger(__name__)


@dataclass
class ParsedKey:
    """Every field of a decoded private key file."""
    cipher_name: bytes
    kdf_name: bytes
    kdf_options: bytes
    num_keys: int
    public_key_blob: bytes
    check1: int
    check2: int
    keytype: bytes
    public: bytes
    private: bytes
    comment: bytes
    padding: bytes

    @property
    def fingerprint(self) -> str:
        return fingerprint_sha256(self.public_key_blob)

    @property
    def keypair(self) -> KeyPair:
        return KeyPair(public=self.public, private=self.private)


def _expect(condition: bool, message: str) -> None:
    if not condition:
        raise KeyFormatError(message)


def parse_container(data: bytes) -> ParsedKey:
    """Decode the binary container (magic included)."""
    _expect(data.startswith(MAGIC), "Missing openssh-key-v1 magic")
    outer = WireReader(data[len(MAGIC):])
    cipher_name = outer.read_bytes()
    kdf_name = outer.read_bytes()
    kdf_options = outer.read_bytes()
    num_keys = outer.read_u32()
    _expect(cipher_name == CIPHER_NONE, f"Unsupported cipher {cipher_name!r}")
    _expect(kdf_name == KDF_NONE, f"Unsupported KDF {kdf_name!r}")
    _expect(kdf_options == b"", "KDF options must be empty for unencrypted keys")
    _expect(num_keys == 1, f"Expected exactly one key, found {num_keys}")

    blob = outer.read_bytes()
    block = outer.read_bytes()
    _expect(outer.remaining == 0, f"{outer.remaining} trailing bytes after private key block")
    _expect(len(block) % BLOCK_SIZE == 0, "Private key block is not block aligned")

    inner = WireReader(block)
    check1 = inner.read_u32()
    check2 = inner.read_u32()
    _expect(check1 == check2, "Check integers do not match")
    keytype = inner.read_bytes()
    _expect(keytype == KEY_ALGO_ED25519, f"Unsupported key type {keytype!r}")
    public = inner.read_bytes()
    private = inner.read_bytes()
    comment = inner.read_bytes()
    padding = inner.read_rest()
    _expect(is_valid_padding(padding), "Invalid padding")
    _expect(len(public) == PUBLIC_KEY_SIZE and len(private) == PRIVATE_KEY_SIZE, "Unexpected Ed25519 key sizes")
    _expect(blob == public_key_blob(public), "Public key blob does not match private key record")
    _expect(private[SEED_SIZE:] == public, "Public key does not match private key")

    logger.debug("Parsed %s byte private key block", len(block))
    return ParsedKey(
        cipher_name=cipher_name,
        kdf_name=kdf_name,
        kdf_options=kdf_options,
        num_keys=num_keys,
        public_key_blob=blob,
        check1=check1,
        check2=check2,
        keytype=keytype,
        public=public,
        private=private,
        comment=comment,
        padding=padding,
    )


def parse_private_key(pem) -> ParsedKey:
    """
    Decode a PEM-armored OpenSSH private key.

    Raises:
        PEMFormatError: if the armor is missing or malformed
        KeyFormatError: if the container is not a single unencrypted Ed25519 key
    """
    return parse_container(dearmor(pem, OPENSSH_PRIVATE_KEY))
