"""Hyprland IPC client: the source of authoritative window and monitor rectangles."""

import logging
import socket
from pathlib import Path

from wlim.config import CONFIG
from wlim.geometry.feed import parse_clients, parse_monitors, union_screen_bounds
from wlim.geometry.views import ClientRecord, MonitorRecord, ScreenBounds
from wlim.session.views import CompositorUnavailableError

logger = logging.getLogger(__name__)

READ_CHUNK = 8192


class HyprlandIPC:
	"""Issues one request per connection on the compositor's command socket and reads the reply to EOF."""

	def __init__(self, instance_signature: str | None = None, runtime_dir: str | None = None, timeout: float = 2.0):
		self.instance_signature = instance_signature if instance_signature is not None else CONFIG.HYPRLAND_INSTANCE_SIGNATURE
		self.runtime_dir = runtime_dir if runtime_dir is not None else CONFIG.XDG_RUNTIME_DIR
		self.timeout = timeout

	def socket_paths(self) -> list[Path]:
		"""Candidate socket paths, legacy /tmp location first."""
		if not self.instance_signature:
			return []
		paths = [Path('/tmp/hypr') / self.instance_signature / '.socket.sock']
		if self.runtime_dir:
			paths.append(Path(self.runtime_dir) / 'hypr' / self.instance_signature / '.socket.sock')
		return paths

	def _connect(self) -> socket.socket:
		paths = self.socket_paths()
		if not paths:
			raise CompositorUnavailableError('HYPRLAND_INSTANCE_SIGNATURE is not set')
		errors: dict[str, str] = {}
		for path in paths:
			sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
			sock.settimeout(self.timeout)
			try:
				sock.connect(str(path))
				return sock
			except OSError as e:
				sock.close()
				errors[str(path)] = str(e)
		raise CompositorUnavailableError('Could not connect to the Hyprland socket', details=errors)

	def request(self, command: str) -> str:
		with self._connect() as sock:
			try:
				sock.sendall(command.encode('utf-8'))
				chunks: list[bytes] = []
				while True:
					chunk = sock.recv(READ_CHUNK)
					if not chunk:
						break
					chunks.append(chunk)
			except OSError as e:
				raise CompositorUnavailableError(f'Hyprland request {command!r} failed', details={'error': str(e)}) from e
		reply = b''.join(chunks).decode('utf-8', errors='replace')
		logger.debug(f'📡 {command} -> {len(reply)} bytes')
		return reply

	def clients_json(self) -> str:
		return self.request('j/clients')

	def monitors_json(self) -> str:
		return self.request('j/monitors')

	def clients(self) -> list[ClientRecord]:
		return parse_clients(self.clients_json())

	def monitors(self) -> list[MonitorRecord]:
		return parse_monitors(self.monitors_json())

	def screen_bounds(self) -> ScreenBounds:
		"""Union of monitor rectangles; 1920x1080 when the compositor cannot be asked."""
		try:
			return union_screen_bounds(self.monitors())
		except CompositorUnavailableError as e:
			logger.warning(f'Using default screen bounds: {e}')
			return union_screen_bounds([])
