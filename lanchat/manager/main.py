import argparse
from lanchat.config import ChatConfig, BROADCAST_ADDRESS, DISCOVERY_PORT, MESSAGE_PORT, ANNOUNCE_INTERVAL_SECONDS
from lanchat.ui.logging import Logger
from lanchat.ui.commands import CommandHandler
from lanchat.manager.chat_controller import ChatController

logger = Logger()

STARTER_CODENAME = 'STARTER '

server_logger = logger.get_logger(f'[{STARTER_CODENAME}]')

def build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(prog="lanchat", description="Discover peers on the LAN and message them directly.")
  parser.add_argument("-n", "--name", default=None, help="Display name (default: generated User-<timestamp>)")
  parser.add_argument("-b", "--broadcast", default=BROADCAST_ADDRESS, help="Broadcast address, or 'auto' for <own subnet>.255")
  parser.add_argument("-d", "--discovery-port", type=int, default=DISCOVERY_PORT, help="UDP discovery port")
  parser.add_argument("-p", "--message-port", type=int, default=MESSAGE_PORT, help="TCP port for incoming messages")
  parser.add_argument("-i", "--interval", type=float, default=ANNOUNCE_INTERVAL_SECONDS, help="Seconds between announcements")
  parser.add_argument("--peer-ttl", type=float, default=None, help="Forget peers silent for this many seconds (default: never)")
  parser.add_argument("--mdns", action="store_true", help="Also discover peers with mDNS")
  parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose mode")
  return parser

def config_from_args(args: argparse.Namespace) -> ChatConfig:
  return ChatConfig(
    broadcast_address=args.broadcast,
    discovery_port=args.discovery_port,
    message_port=args.message_port,
    announce_interval=args.interval,
    peer_ttl=args.peer_ttl,
    mdns_enabled=args.mdns,
    verbose=args.verbose,
  )

def main(argv=None):
  args = build_parser().parse_args(argv)
  server_logger.info("Starting LAN chat...")
  controller = ChatController(config_from_args(args), name=args.name)
  handler = CommandHandler(controller, controller.chat_logger)
  controller.start()
  try:
    handler.run()
  finally:
    controller.stop()

if __name__ == "__main__":
  main()
