from typing import TYPE_CHECKING, Optional
from lanchat.utils.errors import DeliveryError, IndexOutOfRange, ValidationError
from lanchat.ui.logging import Logger, LoggerInstance

if TYPE_CHECKING:
  from lanchat.manager.chat_controller import ChatController

HELP_TEXT = ("\nCommands:\n"
  "  help                     - Show this help message\n"
  "  peers                    - List discovered peers\n"
  "  select <index>           - Choose the peer 'send' goes to\n"
  "  send <msg>               - Send a message to the selected peer\n"
  "  msg <index> <msg>        - Send a message to the peer at <index>\n"
  "  history                  - Show the message transcript\n"
  "  whoami                   - Show this session's name and address\n"
  "  verbose                  - Toggle debug output\n"
  "  quit                     - Exit")

class CommandHandler:
  """
  Terminal front-end over a ChatController.
  """
  def __init__(self, controller: 'ChatController', logger: 'LoggerInstance'):
    self.controller = controller
    self.logger = logger
    self.selected_endpoint: Optional[str] = None
    
    controller.on_message_received(self.notify_message)

  def notify_message(self, text: str) -> None:
    self.logger.info(f"[New Message] {text}")

  def list_peers(self) -> None:
    roster = self.controller.get_roster_snapshot()
    if not roster:
      self.logger.info("No peers discovered yet.")
      return
 
    self.logger.info(f"Peer List: {len(roster)} peers known.")
    for index, (name, endpoint) in enumerate(roster):
      marker = "*" if endpoint == self.selected_endpoint else " "
      self.logger.info(f"{marker} [{index}] {name} ({endpoint})")

  def select(self, index_str: str) -> None:
    if not index_str.isdigit():
      self.logger.info("Usage: select <index>")
      return
    try:
      self.selected_endpoint = self.controller.select_peer(int(index_str))
    except IndexOutOfRange as e:
      self.logger.error(f"{e}. Run 'peers' to refresh the list.")
      return
    self.logger.info(f"Selected {self.selected_endpoint}")

  def send(self, endpoint: Optional[str], message: str) -> bool:
    try:
      self.controller.send_message(endpoint or "", message)
    except ValidationError as e:
      self.logger.warning(f"Error: {e}")
      return False
    except DeliveryError as e:
      self.logger.error(str(e))
      return False
    self.logger.info(f"Me: {message}")
    return True

  def send_to_index(self, index_str: str, message: str) -> None:
    if not index_str.isdigit():
      self.logger.info("Usage: msg <index> <message>")
      return
    try:
      endpoint = self.controller.select_peer(int(index_str))
    except IndexOutOfRange as e:
      self.logger.error(f"{e}. Run 'peers' to refresh the list.")
      return
    self.send(endpoint, message)

  def show_history(self) -> None:
    entries = self.controller.get_transcript()
    if not entries:
      self.logger.info("No messages yet.")
      return
    self.logger.info("Transcript:")
    for entry in entries:
      self.logger.info(entry)

  def whoami(self) -> None:
    self.logger.info(f"{self.controller.name} at {self.controller.ip}:{self.controller.message_port}")

  def handle(self, cmd: str) -> bool:
    """Run one shell command. Returns False when the shell should exit."""
    if cmd == "help":
      self.logger.info(HELP_TEXT)
    elif cmd == "peers":
      self.list_peers()
    elif cmd == "select" or cmd.startswith("select "):
      parts = cmd.split(" ", 1)
      self.select(parts[1].strip() if len(parts) == 2 else "")
    elif cmd == "send" or cmd.startswith("send "):
      parts = cmd.split(" ", 1)
      self.send(self.selected_endpoint, parts[1] if len(parts) == 2 else "")
    elif cmd.startswith("msg "):
      parts = cmd.split(" ", 2)
      if len(parts) < 3:
        self.logger.info("Usage: msg <index> <message>")
      else:
        _, index_str, message = parts
        self.send_to_index(index_str, message)
    elif cmd == "history":
      self.show_history()
    elif cmd == "whoami":
      self.whoami()
    elif cmd == "verbose":
      Logger().set_show_debug(not Logger().show_debug)
      self.logger.info(f"Verbose mode {'on' if Logger().show_debug else 'off'}")
    elif cmd == "quit":
      return False
    elif cmd:
      self.logger.warning("Unknown command. Type 'help' for available commands.")
    return True

  def run(self) -> None:
    self.logger.info(f"LAN chat started as {self.controller.name}")
    self.logger.info("Type 'help' for commands.")
    while True:
      try:
        cmd = self.logger.input("", end="").strip()
        if not self.handle(cmd):
          break
      except (KeyboardInterrupt, EOFError):
        print("") # For better looks
        break
      except Exception as e:
        self.logger.error(f"Error: {e}")
