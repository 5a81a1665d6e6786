from .config import (
  BROADCAST_ADDRESS,
  DISCOVERY_PORT,
  MESSAGE_PORT,
  ANNOUNCE_INTERVAL_SECONDS,
  TRANSCRIPT_CAPACITY,
  BUFFER_SIZE,
  MAX_MESSAGE_BYTES,
  ENCODING,
  SESSION_NAME_PREFIX,
  MDNS_SERVICE_TYPE,
  ChatConfig,
)

__all__ = [
  "BROADCAST_ADDRESS",
  "DISCOVERY_PORT",
  "MESSAGE_PORT",
  "ANNOUNCE_INTERVAL_SECONDS",
  "TRANSCRIPT_CAPACITY",
  "BUFFER_SIZE",
  "MAX_MESSAGE_BYTES",
  "ENCODING",
  "SESSION_NAME_PREFIX",
  "MDNS_SERVICE_TYPE",
  "ChatConfig",
]
