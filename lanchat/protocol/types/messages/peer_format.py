import time
from dataclasses import dataclass, field

@dataclass
class Peer:
	name: str
	endpoint: str
	last_seen: float = field(default_factory=time.time)

	@property
	def host(self) -> str:
		return self.endpoint.rpartition(':')[0]

	@property
	def port(self) -> int:
		return int(self.endpoint.rpartition(':')[2])
