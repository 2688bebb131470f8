"""AT-SPI2 backed AccessibleNode, via GObject introspection."""

import logging
from collections.abc import Iterator
from functools import cached_property
from typing import Any

from wlim.accessibility.views import Role, role_name
from wlim.geometry.views import Rect

logger = logging.getLogger(__name__)

_atspi: Any = None


def _init_atspi() -> Any:
	"""Import and initialise AT-SPI2 once per process."""
	global _atspi
	if _atspi is None:
		import gi

		gi.require_version('Atspi', '2.0')
		from gi.repository import Atspi

		Atspi.init()
		_atspi = Atspi
	return _atspi


class AtspiNode:
	"""
	Wraps an Atspi.Accessible. Accessors talk D-Bus and may raise; the
	collector decides what a failure costs.
	"""

	def __init__(self, accessible: Any):
		self._accessible = accessible

	def __repr__(self) -> str:
		return f'AtspiNode({self._accessible!r})'

	@property
	def role(self) -> str:
		raw = self._accessible.get_role_name()
		return role_name(raw) if raw else Role.UNKNOWN.value

	@property
	def bounds(self) -> Rect | None:
		component = self._accessible.get_component_iface()
		if component is None:
			return None
		extents = component.get_extents(_init_atspi().CoordType.SCREEN)
		if extents is None:
			return None
		return Rect(extents.x, extents.y, extents.width, extents.height)

	@cached_property
	def _states(self) -> Any:
		return self._accessible.get_state_set()

	def _has_state(self, name: str) -> bool:
		states = self._states
		if states is None:
			# No state set means nothing tells us to hide it
			return True
		return bool(states.contains(getattr(_init_atspi().StateType, name)))

	@property
	def is_visible(self) -> bool:
		return self._has_state('VISIBLE')

	@property
	def is_showing(self) -> bool:
		return self._has_state('SHOWING')

	@property
	def children(self) -> Iterator['AtspiNode']:
		"""Children fetched one D-Bus call at a time, so a caller that stops early stops the lookups."""
		count = self._accessible.get_child_count()
		for index in range(count):
			try:
				child = self._accessible.get_child_at_index(index)
			except Exception as e:
				logger.debug(f'Child {index} lookup failed: {e}')
				continue
			if child is not None:
				yield AtspiNode(child)

	@property
	def owner_pid(self) -> int | None:
		pid = self._accessible.get_process_id()
		return pid if pid and pid > 0 else None

	@property
	def name(self) -> str | None:
		return self._accessible.get_name() or None


def desktop_root(index: int = 0) -> AtspiNode:
	"""The AT-SPI desktop, whose children are the running accessible applications."""
	return AtspiNode(_init_atspi().get_desktop(index))
