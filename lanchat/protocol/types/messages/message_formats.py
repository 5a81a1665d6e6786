from lanchat.config import ENCODING

ANNOUNCE_SEPARATOR = "@"
PORT_SEPARATOR = ":"
MESSAGE_TERMINATOR = "\n"

def make_announcement(name: str, port: int) -> bytes:
    """Discovery datagram payload, e.g. `Alice@:8080`."""
    return f"{name}{ANNOUNCE_SEPARATOR}{PORT_SEPARATOR}{port}".encode(ENCODING)

def make_direct_message(text: str) -> bytes:
    """Direct message stream payload: the text as one newline-terminated line."""
    return f"{text}{MESSAGE_TERMINATOR}".encode(ENCODING)
