import threading
import time
from dataclasses import replace
from typing import Dict, List, Optional
from lanchat.protocol import Peer
from lanchat.utils.errors import IndexOutOfRange

class PeerRegistry:
  """
  Thread-safe roster of discovered peers, keyed by their `host:port` endpoint.
  
  Order is insertion order; overwriting an endpoint keeps its position, so an index taken from
  `snapshot()` resolves to the same peer in `get_by_index()` until the roster changes.
  """
  def __init__(self) -> None:
    self._peers: Dict[str, Peer] = {}
    self._lock = threading.Lock()
  
  def upsert(self, endpoint: str, name: str, seen_at: Optional[float] = None) -> bool:
    """Insert or overwrite the peer at `endpoint`.

    Args:
        endpoint (str): `host:port` the peer accepts direct messages on
        name (str): display name the peer announced
        seen_at (float, optional): time of the announcement. Defaults to now.

    Returns:
        bool: True if the endpoint was not known before
    """
    seen_at = time.time() if seen_at is None else seen_at
    with self._lock:
      peer = self._peers.get(endpoint)
      if peer is None:
        self._peers[endpoint] = Peer(name, endpoint, seen_at)
        return True
      
      peer.name = name
      peer.last_seen = seen_at
      return False
  
  def snapshot(self) -> List[Peer]:
    """Copies of every known peer, in roster order."""
    with self._lock:
      return [replace(peer) for peer in self._peers.values()]
  
  def get_by_index(self, index: int) -> str:
    """Resolve a roster position to its endpoint.

    Raises:
        IndexOutOfRange: `index` is negative or past the end of the roster
    """
    with self._lock:
      if index < 0 or index >= len(self._peers):
        raise IndexOutOfRange(f"No peer at index {index} (roster has {len(self._peers)})")
      return list(self._peers)[index]
  
  def get(self, endpoint: str) -> Optional[Peer]:
    with self._lock:
      peer = self._peers.get(endpoint)
      return replace(peer) if peer is not None else None
  
  def prune(self, max_age: float, now: Optional[float] = None) -> List[Peer]:
    """Drop peers not heard from within `max_age` seconds and return them."""
    now = time.time() if now is None else now
    with self._lock:
      stale = [peer for peer in self._peers.values() if now - peer.last_seen > max_age]
      for peer in stale:
        del self._peers[peer.endpoint]
      return stale
  
  def __len__(self) -> int:
    with self._lock:
      return len(self._peers)
  
  def __contains__(self, endpoint: object) -> bool:
    with self._lock:
      return endpoint in self._peers
