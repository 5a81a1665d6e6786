import socket
from typing import Optional
from lanchat.manager.transcript import Transcript
from lanchat.protocol import make_direct_message
from lanchat.utils.endpoints import split_endpoint
from lanchat.utils.errors import DeliveryError
from lanchat.ui.logging import Logger, LoggerInstance

logger = Logger()

SENDER_CODENAME = 'OUTBOX  '

sender_logger = logger.get_logger(f'[yellow][{SENDER_CODENAME}][/]')

OWN_MESSAGE_LABEL = "Me: "

class MessageSender:
  """
  Sends one message per fresh TCP connection and records it in the transcript once written.
  """
  def __init__(self, transcript: Transcript, connect_timeout: Optional[float] = None, logger: Optional[LoggerInstance] = None):
    self.transcript = transcript
    self.connect_timeout = connect_timeout
    self.logger = logger or sender_logger
  
  def send(self, endpoint: str, text: str) -> None:
    """Deliver `text` to the peer listening at `endpoint`.

    Args:
        endpoint (str): `host:port` of the peer's message server
        text (str): message body, sent as one line

    Raises:
        DeliveryError: the endpoint is malformed, or connecting/writing failed. Nothing is retried.
    """
    try:
      address = split_endpoint(endpoint)
    except ValueError as e:
      raise DeliveryError(endpoint, e) from e
    
    try:
      with socket.create_connection(address, timeout=self.connect_timeout) as conn:
        conn.sendall(make_direct_message(text))
    except OSError as e:
      self.logger.debug(f"[FAILED] Message to {endpoint}: {e}")
      raise DeliveryError(endpoint, e) from e
    
    self.transcript.append(OWN_MESSAGE_LABEL + text)
    self.logger.debug(f"[SENT] To {endpoint}: {text[:100]}{'...' if len(text) > 100 else ''}")
