import socket
from typing import Callable, Optional
from zeroconf import Zeroconf, ServiceInfo, ServiceBrowser, ServiceListener
from lanchat.config import MDNS_SERVICE_TYPE
from lanchat.manager.peer_registry import PeerRegistry
from lanchat.utils.endpoints import join_endpoint
from lanchat.ui.logging import Logger, LoggerInstance

logger = Logger()

mdns_logger = logger.get_logger('[green][ mDNS   ][/]')


class MdnsPeerListener(ServiceListener):
	"""Feeds services resolved by the zeroconf browser into the same registry as broadcast discovery."""
	def __init__(self, registry: PeerRegistry, own_service_name: str, on_discover: Callable[[], None]):
		self.registry = registry
		self.own_service_name = own_service_name
		self.on_discover = on_discover

	def remove_service(self, zeroconf: Zeroconf, type: str, name: str) -> None:
		# Peers are never expired by discovery going quiet
		pass
	
	def update_service(self, zeroconf: Zeroconf, type: str, name: str) -> None:
		self.add_service(zeroconf, type, name)

	def add_service(self, zeroconf: Zeroconf, type: str, name: str) -> None:
		if name == self.own_service_name: return
		
		info: Optional[ServiceInfo] = zeroconf.get_service_info(type, name)
		if info is None or not info.addresses or not info.port: return
		
		display_name_raw = info.properties.get(b'display_name', b'')
		display_name = display_name_raw.decode(errors='replace') if display_name_raw is not None else ""
		
		endpoint = join_endpoint(socket.inet_ntoa(info.addresses[0]), info.port)
		
		if self.registry.upsert(endpoint, display_name):
			mdns_logger.info(f"[DISCOVERED] {display_name} at {endpoint}")
		self.on_discover()


class MdnsDiscovery:
	"""
	Registers this instance as a zeroconf service and browses for others.
	"""
	def __init__(self, registry: PeerRegistry, name: str, ip: str, port: int, on_discover: Callable[[], None],
	             zeroconf: Optional[Zeroconf] = None, logger: Optional[LoggerInstance] = None):
		self.registry = registry
		self.name = name
		self.ip = ip
		self.port = port
		self.logger = logger or mdns_logger
		self.zeroconf = zeroconf
		self.service_name = f"{name}_at_{ip.replace('.', '_')}.{MDNS_SERVICE_TYPE}"
		self.listener = MdnsPeerListener(registry, self.service_name, on_discover)
		self._info: Optional[ServiceInfo] = None
		self._browser: Optional[ServiceBrowser] = None

	def start(self) -> None:
		if self.zeroconf is None:
			self.zeroconf = Zeroconf()
		
		self._info = ServiceInfo(
			MDNS_SERVICE_TYPE,
			self.service_name,
			addresses=[socket.inet_aton(self.ip)],
			port=self.port,
			properties={"display_name": self.name}
		)
		self.zeroconf.register_service(self._info)
		self._browser = ServiceBrowser(self.zeroconf, MDNS_SERVICE_TYPE, self.listener)
		self.logger.info(f"[mDNS] Registered: {self.service_name}")

	def stop(self) -> None:
		if self.zeroconf is None:
			return
		if self._browser is not None:
			self._browser.cancel()
			self._browser = None
		if self._info is not None:
			self.zeroconf.unregister_service(self._info)
			self._info = None
		self.zeroconf.close()
		self.zeroconf = None
