import socket
import threading
from typing import Callable, List, Optional, Tuple
from lanchat.config import BUFFER_SIZE
from lanchat.manager.peer_registry import PeerRegistry
from lanchat.protocol import parse_announcement
from lanchat.utils.errors import MalformedPayload, TransportSetupError
from lanchat.ui.logging import Logger, LoggerInstance

logger = Logger()

DISCOVERY_CODENAME = 'DISCOVER'

discovery_logger = logger.get_logger(f'[green][{DISCOVERY_CODENAME}][/]')

STOP_POLL_SECONDS = 0.5 # recvfrom wakes this often to check for stop()

class DiscoveryListener:
  """
  Receives announcements on the discovery port and keeps the peer registry up to date.
  """
  def __init__(self, registry: PeerRegistry, port: int, bind_host: str = "",
               peer_ttl: Optional[float] = None, logger: Optional[LoggerInstance] = None):
    self.registry = registry
    self.port = port
    self.bind_host = bind_host
    self.peer_ttl = peer_ttl
    self.logger = logger or discovery_logger
    
    self._on_roster_changed: List[Callable[[], None]] = []
    self._socket: Optional[socket.socket] = None
    self._stop_event = threading.Event()
    self._thread: Optional[threading.Thread] = None
  
  def on_roster_changed(self, callback: Callable[[], None]) -> None:
    self._on_roster_changed.append(callback)
  
  def bind(self) -> None:
    """Bind the discovery socket, shared with other instances on this host where the OS allows.

    Raises:
        TransportSetupError: the port could not be bound
    """
    try:
      sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
      sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
      if hasattr(socket, "SO_REUSEPORT"):
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEPORT, 1)
      sock.bind((self.bind_host, self.port))
    except OSError as e:
      raise TransportSetupError(f"Cannot listen for announcements on UDP {self.port}: {e}") from e
    
    self._socket = sock
    self.port = sock.getsockname()[1]
  
  def handle_datagram(self, data: bytes, addr: Tuple[str, int]) -> bool:
    """Upsert the announcing peer. Returns False if the datagram was not an announcement."""
    sender_ip = addr[0]
    try:
      name, port_field = parse_announcement(data)
    except MalformedPayload as e:
      # Foreign broadcast traffic is expected on a shared LAN
      self.logger.debug(f"[IGNORED] From {sender_ip}: {e}")
      return False
    
    endpoint = sender_ip + port_field
    if self.registry.upsert(endpoint, name):
      self.logger.info(f"[DISCOVERED] {name} at {endpoint}")
    
    if self.peer_ttl is not None:
      for stale in self.registry.prune(self.peer_ttl):
        self.logger.info(f"[EXPIRED] {stale.name} at {stale.endpoint}")
    
    self._notify()
    return True
  
  def _notify(self) -> None:
    for callback in self._on_roster_changed:
      try:
        callback()
      except Exception as e:
        self.logger.error(f"Roster callback failed: {e}")
  
  def start(self) -> threading.Thread:
    if self._socket is None:
      self.bind()
    self._stop_event.clear()
    self._thread = threading.Thread(target=self._listen, name="lanchat-discovery", daemon=True)
    self._thread.start()
    self.logger.info(f"Listening for announcements on UDP {self.port}")
    return self._thread
  
  def _listen(self) -> None:
    sock = self._socket
    sock.settimeout(STOP_POLL_SECONDS)
    while not self._stop_event.is_set():
      try:
        data, addr = sock.recvfrom(BUFFER_SIZE)
      except socket.timeout:
        continue
      except OSError as e:
        if self._stop_event.is_set():
          break
        self.logger.error(f"[RECV] Discovery read failed: {e}")
        self._stop_event.wait(0.1)
        continue
      
      try:
        self.handle_datagram(data, addr)
      except Exception as e:
        self.logger.error(f"[RECV] Datagram from {addr[0]} not handled: {e}")
  
  def stop(self) -> None:
    self._stop_event.set()
    if self._thread is not None:
      self._thread.join(timeout=STOP_POLL_SECONDS * 4)
      self._thread = None
    if self._socket is not None:
      self._socket.close()
      self._socket = None
  
  @property
  def running(self) -> bool:
    return self._thread is not None and self._thread.is_alive()
