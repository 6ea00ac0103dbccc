"""Block alignment padding for the private key record."""

BLOCK_SIZE = 8  # what ssh-keygen uses for unencrypted keys


def pad_length(unpadded_len: int, block_size: int = BLOCK_SIZE) -> int:
    """Smallest pad that brings ``unpadded_len`` to a multiple of ``block_size``."""
    if block_size < 1:
        raise ValueError("Block size must be at least 1")
    return (block_size - (unpadded_len % block_size)) % block_size


def pad_bytes(unpadded_len: int, block_size: int = BLOCK_SIZE) -> bytes:
    """Pad bytes for a record of ``unpadded_len`` bytes: 1, 2, 3, ..."""
    return bytes(range(1, pad_length(unpadded_len, block_size) + 1))


def is_valid_padding(pad: bytes, block_size: int = BLOCK_SIZE) -> bool:
    """Check that ``pad`` is a sequential pad shorter than one block."""
    return len(pad) < block_size and pad == bytes(range(1, len(pad) + 1))
