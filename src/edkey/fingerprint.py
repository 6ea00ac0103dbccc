import base64
import hashlib

from edkey.keyblock import public_key_blob
from edkey.keys import KeyPair


def fingerprint_sha256(blob: bytes) -> str:
    """Generates the OpenSSH SHA256 fingerprint of a public key blob.

    Args:
        blob: The wire-encoded public key (algorithm name and key).

    Returns:
        ``SHA256:`` followed by the unpadded base64 digest, as printed by
        ``ssh-keygen -l``.
    """
    digest = hashlib.sha256(blob).digest()
    return "SHA256:" + base64.b64encode(digest).decode('ascii').rstrip("=")


def key_fingerprint(keypair: KeyPair) -> str:
    return fingerprint_sha256(public_key_blob(keypair.public))
