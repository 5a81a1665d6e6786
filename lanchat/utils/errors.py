class LanChatError(Exception):
  pass


class TransportSetupError(LanChatError):
  """Raised when a socket cannot be created, resolved or bound. Fatal to the owning component only."""
  pass


class TransportIOError(LanChatError):
  """Raised for send/receive failures on an already set up socket."""
  pass


class MalformedPayload(LanChatError):
  """Raised when a discovery datagram is not a `name@:port` announcement."""
  pass


class IndexOutOfRange(LanChatError, IndexError):
  """Raised when a roster selection index does not resolve against the current registry."""
  pass


class ValidationError(LanChatError, ValueError):
  """Raised before sending when the destination or the message text is empty."""
  pass


class DeliveryError(LanChatError):
  """Raised when an outbound message cannot be connected or written."""

  def __init__(self, endpoint: str, cause: BaseException):
    super().__init__(f"Could not deliver message to {endpoint}: {cause}")
    self.endpoint = endpoint
    self.cause = cause
