import time
from lanchat.config import SESSION_NAME_PREFIX

def generate_session_name(prefix: str = SESSION_NAME_PREFIX) -> str:
    """Creates this session's display name from the nanosecond wall clock.

    Example:
    >>> generate_session_name()
    "User-1729350000123456789"

    Args:
        prefix (str): text placed before the timestamp

    Returns:
        str: display name, unique enough to tell two sessions on one LAN apart
    """
    return f"{prefix}{time.time_ns()}"
