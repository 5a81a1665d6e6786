from typing import Deque, List, Dict, Optional, Any
from collections import deque
from datetime import datetime
import threading
from .log_data import *

class Logger:
  """
  Process-wide log store. Keeps the most recent entries in memory and renders them on the rich console.
  """
  _instance: Optional['Logger'] = None
  _lock: threading.Lock = threading.Lock() # Guards singleton creation
  
  def __new__(cls) -> 'Logger':
    """
    Returns the one Logger of this process, creating it on first use.
    """
    if cls._instance is None:
      with cls._lock:
        if cls._instance is None:
          cls._instance = super(Logger, cls).__new__(cls)
          
    return cls._instance
  
  def __init__(self, max_logs: int = LOG_MAX_ENTRIES) -> None:
    if hasattr(self, '_initialized'):
      return
    
    self._logs: Deque[LogEntry] = deque(maxlen=max_logs)
    self._instances: Dict[str, LoggerInstance] = {} 
    self._logs_lock = threading.Lock()
    self._instances_lock = threading.Lock()
    
    # Console held back while the shell is reading a command
    self._console_buffer: List[BufferedLogEntry] = []
    self._console_locked = False
    self._buffer_lock = threading.Lock()
    
    self._show_debug = False
    
    self._initialized = True
  
  def _store_log(self, entry: LogEntry) -> None:
    with self._logs_lock:
      self._logs.append(entry)
  
  def _flush_console_buffer(self) -> None:
    """Print every buffered message and unlock console output."""
    with self._buffer_lock:
      for buffered_entry in self._console_buffer:
        if buffered_entry.console_enabled:
          console.print(str(buffered_entry.entry), end=buffered_entry.end)
      
      self._console_buffer.clear()
      self._console_locked = False
  
  def _lock_console_for_input(self) -> None:
    with self._buffer_lock:
      self._console_locked = True
  
  def _handle_console_output(self, entry: LogEntry, console_enabled: bool, end: str = "\n") -> None:
    """Print the entry now, or buffer it if the console is waiting on input."""
    if entry.level == LogLevel.DEBUG and not self._show_debug:
      return
    
    with self._buffer_lock:
      if self._console_locked:
        self._console_buffer.append(BufferedLogEntry(entry, console_enabled, end))
        if len(self._console_buffer) < BUFFER_MAX_MESSAGES:
          return
        # Too much held back, show it anyway
        pending, self._console_buffer = self._console_buffer, []
      else:
        pending = [BufferedLogEntry(entry, console_enabled, end)]
    
    for buffered_entry in pending:
      if buffered_entry.console_enabled:
        console.print(str(buffered_entry.entry), end=buffered_entry.end)
  
  def set_show_debug(self, enabled: bool) -> None:
    """Print DEBUG entries to the console too. They are always stored."""
    self._show_debug = enabled
  
  @property
  def show_debug(self) -> bool:
    return self._show_debug
  
  def get_logger(self, prefix: str, console_enabled: bool = True) -> 'LoggerInstance':
    """
    Get a logger instance with specific configuration.

    Args:
        prefix (str): Prefix to be added to each message, rich markup allowed.
        console_enabled (bool, optional): Prints to console or not. Defaults to True.
    """
    with self._instances_lock: 
      if prefix not in self._instances:
        instance = LoggerInstance(prefix, console_enabled)
        instance._set_parent(self)
        self._instances[prefix] = instance
      
      return self._instances[prefix]

  def get_logs(self, level: Optional[LogLevel] = None, prefix: Optional[str] = None, start_time: Optional[datetime] = None) -> List[LogEntry]:
    """
    Retrieve stored logs with optional filtering.
    
    Args:
        level: Filter by log level
        prefix: Filter by prefix
        start_time: Filter logs after this time
        
    Returns:
        List of LogEntry objects matching the criteria
    """
    with self._logs_lock:
        filtered_logs = list(self._logs)
    
    if level is not None:
        filtered_logs = [log for log in filtered_logs if log.level == level]
    
    if prefix is not None:
        filtered_logs = [log for log in filtered_logs if log.prefix == prefix]
    
    if start_time is not None:
        filtered_logs = [log for log in filtered_logs if log.timestamp >= start_time]
    
    return filtered_logs
  
  def get_buffer_stats(self) -> Dict[str, Any]:
    with self._buffer_lock:
      return {
        'console_locked': self._console_locked,
        'buffered_messages': len(self._console_buffer),
        'buffer_max_messages': BUFFER_MAX_MESSAGES,
      }
  
  def manual_flush_buffer(self) -> None:
    self._flush_console_buffer()


class LoggerInstance:
  """ 
  Prefixed handle onto the shared Logger, one per component.
  """
  def __init__(self, prefix: str, console_enabled: bool = True):
    self.prefix = prefix
    self.console_enabled = console_enabled
    self._parent_logger: Optional[Logger] = None

  def _set_parent(self, parent_logger: 'Logger') -> None:
    self._parent_logger = parent_logger
  
  def _store(self, level: LogLevel, message: str) -> 'LogEntry':
    if self._parent_logger is None:
        raise RuntimeError("Logger instance not properly initialized")
    
    entry = LogEntry(
        timestamp=datetime.now(),
        level=level,
        prefix=self.prefix,
        message=message
    )
    
    self._parent_logger._store_log(entry)
    return entry
  
  def _log(self, level: LogLevel, message: str, end: str = "\n") -> None:
    entry = self._store(level, message)
    
    if self._parent_logger is not None:
      self._parent_logger._handle_console_output(entry, self.console_enabled, end)
  
  def input(self, message: str, end: str = "\n") -> str:
      """Reads a line from the user. Other output is buffered until the line is read."""
      if self._parent_logger is not None:
        self._parent_logger._lock_console_for_input()
      
      try:
        if self.console_enabled: 
          print_entry = LogEntry(datetime.now(), LogLevel.INPUT, self.prefix, message)
          console.print(str(print_entry), end=end)
        
        received_input = input(message)
      finally:
        if self._parent_logger is not None:
          self._parent_logger._flush_console_buffer()
      
      self._store(LogLevel.INPUT, ' '.join([message, received_input]).strip())
      return received_input
  
  def debug(self, message: str, end: str = "\n") -> None:
      self._log(LogLevel.DEBUG, message, end)
  
  def info(self, message: str, end: str = "\n") -> None:
      self._log(LogLevel.INFO, message, end)
  
  def warning(self, message: str, end: str = "\n") -> None:
      self._log(LogLevel.WARNING, message, end)
  
  def error(self, message: str, end: str = "\n") -> None:
      self._log(LogLevel.ERROR, message, end)
  
  def critical(self, message: str, end: str = "\n") -> None:
      self._log(LogLevel.CRITICAL, message, end)
