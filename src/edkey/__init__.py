from .openssh import encode, encode_with_checkint, marshal, to_pem, public_key_line
from .keys import KeyPair
from .checkint import FixedCheckint, RandomCheckint
from .fingerprint import fingerprint_sha256, key_fingerprint
from .reader import ParsedKey, parse_private_key
from .errors import (
    EdkeyError,
    UnsupportedPublicKeyType,
    InvalidKeyType,
    KeyFormatError,
    PEMFormatError,
    ConfigurationError,
)

__version__ = "1.0.0"
