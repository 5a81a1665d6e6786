import threading
from collections import deque
from typing import Deque, List
from lanchat.config import TRANSCRIPT_CAPACITY

class Transcript:
  """
  Bounded, ordered log of the lines shown to the user. Once full, each append evicts the oldest line.
  """
  def __init__(self, capacity: int = TRANSCRIPT_CAPACITY) -> None:
    if capacity < 1:
      raise ValueError("Transcript capacity must be at least 1")
    self._capacity = capacity
    self._entries: Deque[str] = deque(maxlen=capacity)
    self._lock = threading.Lock()
  
  @property
  def capacity(self) -> int:
    return self._capacity
  
  def append(self, entry: str) -> None:
    with self._lock:
      self._entries.append(entry)
  
  def entries(self) -> List[str]:
    """Oldest first."""
    with self._lock:
      return list(self._entries)
  
  def __len__(self) -> int:
    with self._lock:
      return len(self._entries)
