from .logging import LogEntry, LogLevel, Logger, LoggerInstance
from .commands import CommandHandler

# When importing logging, you can just do `from lanchat.ui import logging`
__all__ = ["LogEntry", "LogLevel", "Logger", "LoggerInstance", "CommandHandler"]
