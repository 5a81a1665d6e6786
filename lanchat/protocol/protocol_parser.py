from typing import Optional, Tuple
from lanchat.config import ENCODING
from lanchat.utils.errors import MalformedPayload
from lanchat.protocol.types.messages.message_formats import ANNOUNCE_SEPARATOR, PORT_SEPARATOR, MESSAGE_TERMINATOR

def parse_announcement(data: bytes) -> Tuple[str, str]:
    '''
    Parses a discovery datagram into its display name and port field.

    The payload is `<name>@<port>` where the port field keeps its leading ':'
    so it can be glued straight onto the sender's IP.

    Example:
    >>> parse_announcement(b"Alice@:8080")
    ("Alice", ":8080")

    Args:
        data (bytes): raw datagram

    Raises:
        MalformedPayload: not UTF-8, not exactly one '@', or the port field is not ':<1-65535>'

    Returns:
        Tuple[str, str]: name and port field
    '''
    try:
        raw = data.decode(ENCODING)
    except UnicodeDecodeError as e:
        raise MalformedPayload(f"Announcement is not {ENCODING}: {e}") from e

    fields = raw.split(ANNOUNCE_SEPARATOR)
    if len(fields) != 2:
        raise MalformedPayload(f"Expected 2 fields, got {len(fields)}: {raw[:64]!r}")

    name, port_field = fields
    port_str = port_field[len(PORT_SEPARATOR):]
    if not port_field.startswith(PORT_SEPARATOR) or not (port_str.isascii() and port_str.isdigit()) or not 0 < int(port_str) < 65536:
        raise MalformedPayload(f"Bad port field: {port_field[:16]!r}")

    return name, port_field


def parse_direct_message(line: bytes) -> Optional[str]:
    '''
    Decodes one line read from a direct message connection.

    Args:
        line (bytes): bytes read up to and including the terminator

    Returns:
        Optional[str]: message text without its line ending, or None when the line never got its terminator
    '''
    if not line.endswith(MESSAGE_TERMINATOR.encode(ENCODING)):
        return None
    return line.decode(ENCODING, errors="replace").rstrip("\r\n")
