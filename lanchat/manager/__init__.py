from .peer_registry import PeerRegistry
from .transcript import Transcript
from .chat_controller import ChatController

__all__ = ["PeerRegistry", "Transcript", "ChatController"]
