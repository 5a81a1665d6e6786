import socket
import threading
from typing import Callable, List, Optional, Tuple
from lanchat.config import MAX_MESSAGE_BYTES
from lanchat.manager.transcript import Transcript
from lanchat.protocol import parse_direct_message
from lanchat.utils.errors import TransportIOError, TransportSetupError
from lanchat.ui.logging import Logger, LoggerInstance

logger = Logger()

SERVER_CODENAME = 'INBOX   '

server_logger = logger.get_logger(f'[magenta][{SERVER_CODENAME}][/]')

ACCEPT_POLL_SECONDS = 0.5 # accept() wakes this often to check for stop()
LISTEN_BACKLOG = 16

MessageCallback = Callable[[str, Tuple[str, int]], None]

class MessageServer:
  """
  Accepts direct message connections. Each connection carries one line and is handled on its own thread.
  """
  def __init__(self, transcript: Transcript, port: int, bind_host: str = "",
               read_timeout: Optional[float] = None, max_message_bytes: int = MAX_MESSAGE_BYTES,
               logger: Optional[LoggerInstance] = None):
    self.transcript = transcript
    self.port = port
    self.bind_host = bind_host
    self.read_timeout = read_timeout
    self.max_message_bytes = max_message_bytes
    self.logger = logger or server_logger
    
    self.messages_received = 0
    self._on_message: List[MessageCallback] = []
    self._counter_lock = threading.Lock()
    self._socket: Optional[socket.socket] = None
    self._stop_event = threading.Event()
    self._thread: Optional[threading.Thread] = None
  
  def on_message(self, callback: MessageCallback) -> None:
    self._on_message.append(callback)
  
  def bind(self) -> None:
    """
    Raises:
        TransportSetupError: the message port is taken or not bindable
    """
    try:
      sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
      sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
      sock.bind((self.bind_host, self.port))
      sock.listen(LISTEN_BACKLOG)
    except OSError as e:
      raise TransportSetupError(f"Cannot listen for messages on TCP {self.port}: {e}") from e
    
    self._socket = sock
    self.port = sock.getsockname()[1]
  
  def start(self) -> threading.Thread:
    if self._socket is None:
      self.bind()
    self._stop_event.clear()
    self._thread = threading.Thread(target=self._accept_loop, name="lanchat-server", daemon=True)
    self._thread.start()
    self.logger.info(f"Accepting messages on TCP {self.port}")
    return self._thread
  
  def _accept_loop(self) -> None:
    sock = self._socket
    sock.settimeout(ACCEPT_POLL_SECONDS)
    while not self._stop_event.is_set():
      try:
        conn, addr = sock.accept()
      except socket.timeout:
        continue
      except OSError as e:
        if self._stop_event.is_set():
          break
        self.logger.error(f"[ACCEPT] Failed: {e}")
        self._stop_event.wait(0.1)
        continue
      
      threading.Thread(target=self.handle_connection, args=(conn, addr), name=f"lanchat-conn-{addr[0]}:{addr[1]}", daemon=True).start()
  
  def read_line(self, conn: socket.socket) -> bytes:
    """Read up to and including the first newline, then close `conn`.

    Raises:
        TransportIOError: the read failed or timed out
    """
    try:
      with conn:
        conn.settimeout(self.read_timeout)
        with conn.makefile('rb') as stream:
          return stream.readline(self.max_message_bytes)
    except OSError as e:
      raise TransportIOError(str(e)) from e
  
  def handle_connection(self, conn: socket.socket, addr: Tuple[str, int]) -> Optional[str]:
    """Read one line from `conn`, close it, and deliver the line. Returns the delivered text."""
    try:
      line = self.read_line(conn)
    except TransportIOError as e:
      self.logger.error(f"[RECV] From {addr[0]}:{addr[1]} - {e}")
      return None
    
    text = parse_direct_message(line)
    if text is None:
      self.logger.warning(f"[DROPPED] Incomplete message from {addr[0]}:{addr[1]} ({len(line)} bytes)")
      return None
    
    self.transcript.append(text)
    with self._counter_lock:
      self.messages_received += 1
    self.logger.debug(f"[RECV] From {addr[0]}:{addr[1]}: {text[:100]}{'...' if len(text) > 100 else ''}")
    
    for callback in self._on_message:
      try:
        callback(text, addr)
      except Exception as e:
        self.logger.error(f"Message callback failed: {e}")
    return text
  
  def stop(self) -> None:
    self._stop_event.set()
    if self._thread is not None:
      self._thread.join(timeout=ACCEPT_POLL_SECONDS * 4)
      self._thread = None
    if self._socket is not None:
      self._socket.close()
      self._socket = None
  
  @property
  def running(self) -> bool:
    return self._thread is not None and self._thread.is_alive()
