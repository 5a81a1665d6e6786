from datetime import datetime
from dataclasses import dataclass
from enum import Enum
from rich.console import Console
from rich.markup import escape


LOG_MAX_ENTRIES = 500
LOG_PRINT_DATETIME = False

# Console buffer configuration
BUFFER_MAX_MESSAGES = 50

console = Console()

class LogLevel(Enum):
  """
  Enum for different log levels.
  """
  INPUT =      "[blue][<<<<<][/]"
  DEBUG =      "[blue][     ][/]"
  INFO =      "[green][  -  ][/]"
  WARNING =  "[yellow][ /!\\ ][/]"
  ERROR =    "[red][ !!! ][/]"
  CRITICAL = "[magenta][!!!!!][/]"
  
@dataclass
class LogEntry:
  """
  A data class that stores related useful logging data
  """ 
  timestamp: datetime
  level: LogLevel
  prefix: str
  message: str
  
  def __str__(self) -> str:
    """Generates the console line. The prefix and level carry rich markup, the message is printed literally.

    Returns:
        str: formatted string
    """
    timeStr = f"[black][{self.timestamp.strftime('%H:%M:%S.%f')[:-3]}][/] " if LOG_PRINT_DATETIME else ""
    
    return f"{timeStr}{self.prefix} {self.level.value} {escape(self.message)}"

@dataclass
class BufferedLogEntry:
  """
  A log entry held back while the console waits on user input
  """
  entry: LogEntry
  console_enabled: bool
  end: str = "\n"


