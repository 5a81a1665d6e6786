from typing import Tuple

def join_endpoint(host: str, port: int) -> str:
    """Formats a host and port into the canonical `host:port` endpoint string."""
    return f"{host}:{port}"

def split_endpoint(endpoint: str) -> Tuple[str, int]:
    """Splits a `host:port` endpoint back into its parts.

    Example:
    >>> split_endpoint("192.168.10.4:8080")
    ("192.168.10.4", 8080)

    Args:
        endpoint (str): endpoint string, the port after the last ':'

    Raises:
        ValueError: when there is no port, or it is not a number in 1-65535

    Returns:
        Tuple[str, int]: host and port
    """
    host, sep, port_str = endpoint.rpartition(":")
    if not sep or not host or not (port_str.isascii() and port_str.isdigit()):
        raise ValueError(f"Not a host:port endpoint: {endpoint!r}")
    port = int(port_str)
    if not 0 < port < 65536:
        raise ValueError(f"Port out of range in endpoint: {endpoint!r}")
    return host, port

def subnet_broadcast(ip: str) -> str:
    """Guesses the /24 broadcast address for an IPv4 address, e.g. 192.168.10.4 -> 192.168.10.255."""
    return ip.rsplit('.', 1)[0] + '.255'
