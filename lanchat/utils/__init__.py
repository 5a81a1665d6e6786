from .errors import (
  LanChatError,
  TransportSetupError,
  TransportIOError,
  MalformedPayload,
  IndexOutOfRange,
  ValidationError,
  DeliveryError,
)
from .identity import generate_session_name
from .endpoints import join_endpoint, split_endpoint, subnet_broadcast

__all__ = ["LanChatError", "TransportSetupError", "TransportIOError", "MalformedPayload", "IndexOutOfRange", "ValidationError", "DeliveryError", "generate_session_name", "join_endpoint", "split_endpoint", "subnet_broadcast"]
