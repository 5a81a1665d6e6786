from .ui.logging import LogLevel, LogEntry, Logger, LoggerInstance
from .config import ChatConfig
from .manager import ChatController, PeerRegistry, Transcript
from .protocol import Peer

__all__ = ["LogLevel", "LogEntry", "Logger", "LoggerInstance", "ChatConfig", "ChatController", "PeerRegistry", "Transcript", "Peer"]
