from dataclasses import dataclass
from typing import Optional

# --- Constants ---
BROADCAST_ADDRESS = "192.168.10.255"   # "auto" derives <own subnet>.255
DISCOVERY_PORT = 9999                  # UDP, shared by every peer
MESSAGE_PORT = 8080                    # TCP, direct messages
ANNOUNCE_INTERVAL_SECONDS = 5.0
TRANSCRIPT_CAPACITY = 100

BUFFER_SIZE = 1024                     # Max discovery datagram read
MAX_MESSAGE_BYTES = 64 * 1024          # Max direct message line read
ENCODING = "utf-8"

SESSION_NAME_PREFIX = "User-"
MDNS_SERVICE_TYPE = "_lanchat._tcp.local."


@dataclass(frozen=True)
class ChatConfig:
  """
  Runtime settings for one chat instance. Every field defaults to the module constant of the same name.
  """
  broadcast_address: str = BROADCAST_ADDRESS
  discovery_port: int = DISCOVERY_PORT
  message_port: int = MESSAGE_PORT
  announce_interval: float = ANNOUNCE_INTERVAL_SECONDS
  transcript_capacity: int = TRANSCRIPT_CAPACITY
  bind_host: str = ""
  peer_ttl: Optional[float] = None       # None keeps peers forever
  read_timeout: Optional[float] = None   # None blocks until the peer sends or closes
  connect_timeout: Optional[float] = None
  mdns_enabled: bool = False
  verbose: bool = False
