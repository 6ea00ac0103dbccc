"""Encode Ed25519 keys as OpenSSH private key files.

The output of every function here can be written to a file verbatim and
used with ``ssh -i``.
"""

import base64
import logging
from typing import Optional, Union

from edkey.checkint import CheckintSource, resolve_source
from edkey.keyblock import KEY_ALGO_ED25519, build_container, public_key_blob
from edkey.keys import KeyPair
from edkey.pem import OPENSSH_PRIVATE_KEY, armor

logger = logging.getLogger(__name__)

Comment = Union[str, bytes]


def marshal(keypair: KeyPair, comment: Comment = "", checkint: int = 0) -> bytes:
    """
    Encode ``keypair`` with an explicit checkint.

    Output is byte-identical for identical arguments.

    Raises:
        UnsupportedPublicKeyType: if ``keypair`` is not shaped like Ed25519
    """
    return armor(build_container(keypair, comment, checkint), OPENSSH_PRIVATE_KEY)


def encode_with_checkint(public: bytes, private: bytes, comment: Comment, checkint: int) -> bytes:
    """Deterministic form of ``encode``."""
    return marshal(KeyPair(public=bytes(public), private=bytes(private)), comment, checkint)


def encode(
    public: bytes,
    private: bytes,
    comment: Comment = "",
    checkint_source: Optional[CheckintSource] = None,
) -> bytes:
    """
    Encode a raw key pair into the OpenSSH private key format.

    Args:
        public: 32-byte Ed25519 public key
        private: 64-byte expanded private key (seed followed by public key)
        comment: Free-form comment, stored verbatim
        checkint_source: Callable returning the 32-bit checkint. One value
            is drawn per call; the system CSPRNG is used when omitted.

    Returns:
        PEM-armored private key
    """
    checkint = resolve_source(checkint_source)()
    return encode_with_checkint(public, private, comment, checkint)


def to_pem(key, comment: Comment = "", checkint_source: Optional[CheckintSource] = None) -> bytes:
    """Encode any key object ``KeyPair.from_key`` accepts."""
    keypair = KeyPair.from_key(key)
    return encode(keypair.public, keypair.private, comment, checkint_source)


def public_key_line(keypair: KeyPair, comment: Comment = "") -> str:
    """Public key in ``authorized_keys`` / ``.pub`` form."""
    if isinstance(comment, bytes):
        comment = comment.decode('utf-8', errors='replace')
    blob = base64.b64encode(public_key_blob(keypair.public)).decode('ascii')
    line = f"{KEY_ALGO_ED25519.decode('ascii')} {blob}"
    if comment:
        line += f" {comment}"
    return line
