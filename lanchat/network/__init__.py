from .announcer import Announcer
from .discovery_listener import DiscoveryListener
from .message_server import MessageServer
from .message_sender import MessageSender, OWN_MESSAGE_LABEL
from .mdns import MdnsDiscovery, MdnsPeerListener
from .network_manager import NetworkManager

__all__ = ["Announcer", "DiscoveryListener", "MessageServer", "MessageSender", "OWN_MESSAGE_LABEL", "MdnsDiscovery", "MdnsPeerListener", "NetworkManager"]
