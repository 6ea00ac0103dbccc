"""Custom exception classes for edkey."""

class EdkeyError(Exception):
    """Base class for edkey errors."""
    pass

class UnsupportedPublicKeyType(EdkeyError):
    """Key pair does not have the shape of an Ed25519 key."""
    pass

# Name used for the same condition by the key block builder.
InvalidKeyType = UnsupportedPublicKeyType

class KeyFormatError(EdkeyError):
    """Encoded private key could not be parsed."""
    pass

class PEMFormatError(KeyFormatError):
    """PEM armor is missing or malformed."""
    pass

class ConfigurationError(EdkeyError):
    """Configuration error."""
    pass
