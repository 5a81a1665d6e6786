from typing import Callable, List, Optional, Tuple
from lanchat.config import ChatConfig
from lanchat.manager.peer_registry import PeerRegistry
from lanchat.manager.transcript import Transcript
from lanchat.network.message_sender import MessageSender
from lanchat.utils import generate_session_name
from lanchat.utils.errors import ValidationError
from lanchat.ui import logging

logger = logging.Logger()

CONTROLLER_CODENAME = 'LANCHAT '
CONTROLLER_PREFIX = f'[green][{CONTROLLER_CODENAME}][/]'

RosterCallback = Callable[[], None]
MessageReceivedCallback = Callable[[str], None]


class ChatController:
    """
    Core of one chat instance, and the only surface a front-end talks to.

    Roster and message observers are called synchronously on the network thread that caused the change,
    after the registry or transcript has been updated.
    """
    def __init__(self, config: Optional[ChatConfig] = None, name: Optional[str] = None):
        self.config = config or ChatConfig()
        self.name = name or generate_session_name()
        
        self.registry = PeerRegistry()
        self.transcript = Transcript(self.config.transcript_capacity)
        self.chat_logger = logger.get_logger(CONTROLLER_PREFIX)
        logger.set_show_debug(self.config.verbose)
        
        self._roster_callbacks: List[RosterCallback] = []
        self._message_callbacks: List[MessageReceivedCallback] = []
        
        self.sender = MessageSender(self.transcript, self.config.connect_timeout)
        
        from lanchat.network.network_manager import NetworkManager
        self.network_manager = NetworkManager(self, self.chat_logger)
        self._started = False

    @property
    def ip(self) -> str:
        return self.network_manager.ip

    @property
    def message_port(self) -> int:
        return self.network_manager.server.port

    def start(self) -> None:
        if self._started:
            return
        self.network_manager._start_threads()
        self._started = True
        self.chat_logger.info(f"[INIT] Peer initialized: {self.name} at {self.ip}:{self.message_port}")

    def stop(self) -> None:
        if not self._started:
            return
        self.network_manager._stop_threads()
        self._started = False
        self.chat_logger.info("[STOP] Network threads stopped")

    def __enter__(self) -> "ChatController":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    # --- Observers ---
    def on_roster_changed(self, callback: RosterCallback) -> None:
        self._roster_callbacks.append(callback)

    def on_message_received(self, callback: MessageReceivedCallback) -> None:
        self._message_callbacks.append(callback)

    def _on_roster_changed(self) -> None:
        for callback in self._roster_callbacks:
            try:
                callback()
            except Exception as e:
                self.chat_logger.error(f"Roster observer failed: {e}")

    def _on_message(self, text: str, sender: Tuple[str, int]) -> None:
        for callback in self._message_callbacks:
            try:
                callback(text)
            except Exception as e:
                self.chat_logger.error(f"Message observer failed: {e}")

    # --- Queries ---
    def get_roster_snapshot(self) -> List[Tuple[str, str]]:
        """(name, endpoint) of every known peer, in roster order."""
        return [(peer.name, peer.endpoint) for peer in self.registry.snapshot()]

    def select_peer(self, index: int) -> str:
        """Endpoint of the peer at `index`; raises IndexOutOfRange for a stale or bad index."""
        return self.registry.get_by_index(index)

    def get_transcript(self) -> List[str]:
        return self.transcript.entries()

    # --- Actions ---
    def send_message(self, endpoint: str, text: str) -> None:
        """Send `text` to `endpoint` and record it as `Me: <text>`.

        Raises:
            ValidationError: no peer selected, or the message is empty or spans more than one line
            DeliveryError: the peer could not be reached
        """
        if not endpoint:
            raise ValidationError("Please select a user before sending")
        if not text:
            raise ValidationError("Please enter a message")
        if "\n" in text or "\r" in text:
            raise ValidationError("Messages must fit on one line")
        self.sender.send(endpoint, text)
