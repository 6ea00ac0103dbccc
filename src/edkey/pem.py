"""PEM armor for binary blobs."""

import base64
import binascii

from edkey.errors import PEMFormatError

OPENSSH_PRIVATE_KEY = "OPENSSH PRIVATE KEY"
LINE_LENGTH = 64


def armor(data: bytes, label: str = OPENSSH_PRIVATE_KEY, line_length: int = LINE_LENGTH) -> bytes:
    """
    Wrap ``data`` in a PEM block.

    Args:
        data: Payload, embedded unmodified
        label: Block type used in the delimiter lines
        line_length: Base64 characters per body line

    Returns:
        The PEM text as ASCII bytes, ending in a newline
    """
    body = base64.b64encode(data).decode('ascii')
    lines = [f"-----BEGIN {label}-----"]
    lines.extend(body[i:i + line_length] for i in range(0, len(body), line_length))
    lines.append(f"-----END {label}-----")
    return ("\n".join(lines) + "\n").encode('ascii')


def dearmor(text, label: str = OPENSSH_PRIVATE_KEY) -> bytes:
    """Extract the payload of the first ``label`` PEM block in ``text``."""
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode('ascii')
        except UnicodeDecodeError as e:
            raise PEMFormatError("PEM text is not ASCII") from e

    begin = f"-----BEGIN {label}-----"
    end = f"-----END {label}-----"
    lines = [line.strip() for line in text.splitlines()]
    try:
        start = lines.index(begin)
        stop = lines.index(end, start + 1)
    except ValueError:
        raise PEMFormatError(f"No {label} block found") from None

    body = "".join(lines[start + 1:stop])
    try:
        return base64.b64decode(body, validate=True)
    except binascii.Error as e:
        raise PEMFormatError(f"Invalid base64 in {label} block: {e}") from e
