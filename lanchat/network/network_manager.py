import socket
from typing import TYPE_CHECKING, Optional
from lanchat.utils.endpoints import subnet_broadcast
from lanchat.utils.errors import TransportSetupError
from lanchat.ui.logging import LoggerInstance
from .announcer import Announcer
from .discovery_listener import DiscoveryListener
from .message_server import MessageServer
from .mdns import MdnsDiscovery

if TYPE_CHECKING:
  from lanchat.manager.chat_controller import ChatController

AUTO_BROADCAST = "auto"

class NetworkManager:
  """
  Starts and stops the background network components of one controller.
  
  A component whose socket cannot be set up is logged and left stopped; the others keep running.
  """
  def __init__(self, controller: "ChatController", logger: "LoggerInstance"):
    self.controller = controller
    self.logger = logger
    config = controller.config
    
    self.ip = self._get_own_ip()
    self.broadcast_address = subnet_broadcast(self.ip) if config.broadcast_address == AUTO_BROADCAST else config.broadcast_address
    
    self.server = MessageServer(controller.transcript, config.message_port, config.bind_host, read_timeout=config.read_timeout)
    self.listener = DiscoveryListener(controller.registry, config.discovery_port, config.bind_host, peer_ttl=config.peer_ttl)
    self.announcer: Optional[Announcer] = None
    self.mdns: Optional[MdnsDiscovery] = None
    
    self.server.on_message(controller._on_message)
    self.listener.on_roster_changed(controller._on_roster_changed)

  def _get_own_ip(self) -> str:
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(("8.8.8.8", 80))
        return s.getsockname()[0]
    except OSError:
        return "127.0.0.1"
    finally:
        s.close()

  def _start_threads(self) -> None:
    config = self.controller.config
    
    # Server first, so the announced port is the one actually bound
    try:
      self.server.start()
    except TransportSetupError as e:
      self.logger.critical(f"[SERVER] {e}. Incoming messages are disabled.")
    
    try:
      self.listener.start()
    except TransportSetupError as e:
      self.logger.critical(f"[DISCOVERY] {e}. Peers will not be discovered.")
    
    self.announcer = Announcer(self.controller.name, self.server.port, self.broadcast_address, config.discovery_port, config.announce_interval)
    try:
      self.announcer.start()
    except TransportSetupError as e:
      self.logger.critical(f"[ANNOUNCE] {e}. Other peers will not see this one.")
    
    if config.mdns_enabled:
      self.mdns = MdnsDiscovery(self.controller.registry, self.controller.name, self.ip, self.server.port, self.controller._on_roster_changed)
      try:
        self.mdns.start()
      except Exception as e:
        self.logger.error(f"[mDNS] Could not start: {e}")
        self.mdns = None
    
  def _stop_threads(self) -> None:
    if self.mdns is not None:
      self.mdns.stop()
      self.mdns = None
    if self.announcer is not None:
      self.announcer.stop()
      self.announcer = None
    self.listener.stop()
    self.server.stop()
