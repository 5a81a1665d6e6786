from .types.messages.message_formats import (
  make_announcement,
  make_direct_message,
  ANNOUNCE_SEPARATOR,
  MESSAGE_TERMINATOR,
  )
from .types.messages.peer_format import Peer
from .protocol_parser import parse_announcement, parse_direct_message


__all__ = ["make_announcement", "make_direct_message", "ANNOUNCE_SEPARATOR", "MESSAGE_TERMINATOR", "Peer", "parse_announcement", "parse_direct_message"]
