"""Assembly of the openssh-key-v1 container.

Layout after the magic string::

    string  cipher_name       "none"
    string  kdf_name          "none"
    string  kdf_options       ""
    uint32  number_of_keys    1
    string  public_key_blob   string("ssh-ed25519") string(pub)
    string  private_key_block
        uint32  check1
        uint32  check2
        string  keytype       "ssh-ed25519"
        string  pub
        string  priv          seed || pub
        string  comment
        byte[]  padding       1, 2, 3, ...
"""

import logging
from dataclasses import dataclass
from typing import List, Union

from edkey import wire
from edkey.keys import KeyPair
from edkey.padding import BLOCK_SIZE, pad_bytes

logger = logging.getLogger(__name__)

MAGIC = b"openssh-key-v1\x00"
KEY_ALGO_ED25519 = b"ssh-ed25519"
CIPHER_NONE = b"none"
KDF_NONE = b"none"


def public_key_blob(pub: bytes) -> bytes:
    """Algorithm-prefixed public key, as it appears in ``.pub`` files."""
    return wire.encode_bytes(KEY_ALGO_ED25519) + wire.encode_bytes(pub)


@dataclass
class PrivateKeyRecord:
    check1: int
    check2: int
    pub: bytes
    priv: bytes
    comment: bytes = b""
    keytype: bytes = KEY_ALGO_ED25519
    pad: bytes = b""

    def fields(self, include_pad: bool = True) -> List[wire.Field]:
        fields = [
            (wire.encode_u32, self.check1),
            (wire.encode_u32, self.check2),
            (wire.encode_bytes, self.keytype),
            (wire.encode_bytes, self.pub),
            (wire.encode_bytes, self.priv),
            (wire.encode_bytes, self.comment),
        ]
        if include_pad:
            fields.append((wire.encode_raw, self.pad))
        return fields

    def encode(self, include_pad: bool = True) -> bytes:
        return wire.encode_record(self.fields(include_pad))


@dataclass
class ContainerHeader:
    public_key_blob: bytes
    private_key_block: bytes
    cipher_name: bytes = CIPHER_NONE
    kdf_name: bytes = KDF_NONE
    kdf_options: bytes = b""
    num_keys: int = 1

    def fields(self) -> List[wire.Field]:
        return [
            (wire.encode_bytes, self.cipher_name),
            (wire.encode_bytes, self.kdf_name),
            (wire.encode_bytes, self.kdf_options),
            (wire.encode_u32, self.num_keys),
            (wire.encode_bytes, self.public_key_blob),
            (wire.encode_bytes, self.private_key_block),
        ]

    def encode(self) -> bytes:
        return MAGIC + wire.encode_record(self.fields())


def _comment_bytes(comment: Union[str, bytes]) -> bytes:
    if isinstance(comment, str):
        return comment.encode('utf-8')
    return bytes(comment)


def build_private_key_record(
    keypair: KeyPair,
    comment: Union[str, bytes],
    checkint: int,
) -> PrivateKeyRecord:
    """
    Build the padded private key record.

    Raises:
        UnsupportedPublicKeyType: if ``keypair`` is not shaped like Ed25519
    """
    keypair.validate()
    record = PrivateKeyRecord(
        check1=checkint,
        check2=checkint,
        pub=keypair.public,
        priv=keypair.private,
        comment=_comment_bytes(comment),
    )
    unpadded_len = len(record.encode(include_pad=False))
    record.pad = pad_bytes(unpadded_len, BLOCK_SIZE)
    logger.debug("Private key record is %s bytes, padded with %s", unpadded_len, len(record.pad))
    return record


def build_container(
    keypair: KeyPair,
    comment: Union[str, bytes],
    checkint: int,
) -> bytes:
    """Encode the full unencrypted container for a single key."""
    record = build_private_key_record(keypair, comment, checkint)
    header = ContainerHeader(
        public_key_blob=public_key_blob(keypair.public),
        private_key_block=record.encode(),
    )
    return header.encode()
