import socket
import threading
from typing import Optional
from lanchat.config import ANNOUNCE_INTERVAL_SECONDS
from lanchat.protocol import make_announcement
from lanchat.utils.errors import TransportSetupError
from lanchat.ui.logging import Logger, LoggerInstance

logger = Logger()

ANNOUNCER_CODENAME = 'ANNOUNCE'

announcer_logger = logger.get_logger(f'[cyan][{ANNOUNCER_CODENAME}][/]')

class Announcer:
  """
  Broadcasts `name@:port` on the discovery port every `interval` seconds until stopped.
  """
  def __init__(self, name: str, message_port: int, broadcast_address: str, discovery_port: int,
               interval: float = ANNOUNCE_INTERVAL_SECONDS, logger: Optional[LoggerInstance] = None):
    self.name = name
    self.message_port = message_port
    self.broadcast_address = broadcast_address
    self.discovery_port = discovery_port
    self.interval = interval
    self.logger = logger or announcer_logger
    
    self.announcements_sent = 0
    self._socket: Optional[socket.socket] = None
    self._stop_event = threading.Event()
    self._thread: Optional[threading.Thread] = None
  
  def open(self) -> None:
    """Create the broadcast socket.

    Raises:
        TransportSetupError: the OS refused the socket or the broadcast option
    """
    try:
      sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
      sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1) # Enables broadcasting
    except OSError as e:
      raise TransportSetupError(f"Cannot open broadcast socket: {e}") from e
    self._socket = sock
  
  def announce_once(self) -> bool:
    """Send one announcement. Failures are logged, never raised."""
    if self._socket is None:
      self.open()
    
    payload = make_announcement(self.name, self.message_port)
    try:
      self._socket.sendto(payload, (self.broadcast_address, self.discovery_port))
    except OSError as e:
      self.logger.error(f"ANNOUNCE FAILED: To {self.broadcast_address}:{self.discovery_port} - {e}")
      return False
    
    self.announcements_sent += 1
    self.logger.debug(f"[ANNOUNCE] {payload.decode(errors='replace')} -> {self.broadcast_address}:{self.discovery_port}")
    return True
  
  def start(self) -> threading.Thread:
    if self._socket is None:
      self.open()
    self._stop_event.clear()
    self._thread = threading.Thread(target=self._run, name="lanchat-announcer", daemon=True)
    self._thread.start()
    self.logger.info(f"Announcing as {self.name} every {self.interval:g}s to {self.broadcast_address}:{self.discovery_port}")
    return self._thread
  
  def _run(self) -> None:
    while not self._stop_event.is_set():
      self.announce_once()
      self._stop_event.wait(self.interval)
  
  def stop(self) -> None:
    self._stop_event.set()
    if self._thread is not None:
      self._thread.join(timeout=1.0)
      self._thread = None
    if self._socket is not None:
      self._socket.close()
      self._socket = None
  
  @property
  def running(self) -> bool:
    return self._thread is not None and self._thread.is_alive()
