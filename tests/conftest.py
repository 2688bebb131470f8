"""Shared fixtures: an in-memory accessible tree standing in for AT-SPI."""

from dataclasses import dataclass, field

import pytest

from wlim.config import HintSettings
from wlim.geometry.views import ClientRecord, Rect, ScreenBounds
from wlim.session.views import CompositorUnavailableError


@dataclass
class FakeNode:
	role: str = 'panel'
	bounds: Rect | None = None
	is_visible: bool = True
	is_showing: bool = True
	children: list['FakeNode'] = field(default_factory=list)
	owner_pid: int | None = None
	name: str | None = None


class BrokenNode:
	"""A node whose every accessor fails, like a dead D-Bus peer."""

	def __init__(self, children: list[FakeNode] | None = None):
		self._children = children or []

	@property
	def role(self) -> str:
		raise RuntimeError('role lookup failed')

	@property
	def bounds(self) -> Rect | None:
		raise RuntimeError('extents lookup failed')

	@property
	def is_visible(self) -> bool:
		return True

	@property
	def is_showing(self) -> bool:
		return True

	@property
	def children(self) -> list[FakeNode]:
		return self._children

	@property
	def owner_pid(self) -> int | None:
		raise RuntimeError('pid lookup failed')

	@property
	def name(self) -> str | None:
		raise RuntimeError('name lookup failed')


def button(x: int, y: int, width: int = 40, height: int = 20, **kwargs) -> FakeNode:
	return FakeNode(role='push button', bounds=Rect(x, y, width, height), **kwargs)


def window(*children: FakeNode, name: str | None = 'Window', visible: bool = True) -> FakeNode:
	return FakeNode(role='frame', bounds=Rect(0, 0, 800, 600), children=list(children), name=name, is_visible=visible)


def app(*windows: FakeNode, pid: int | None = 100) -> FakeNode:
	return FakeNode(role='application', children=list(windows), owner_pid=pid)


def desktop(*apps: FakeNode) -> FakeNode:
	return FakeNode(role='desktop frame', children=list(apps))


@pytest.fixture
def settings() -> HintSettings:
	return HintSettings(settle_delay=0.0)


def two_button_tree() -> FakeNode:
	"""Buttons at (10, 10) and (300, 300), labeled 'a' and 'b'."""
	return desktop(app(window(button(10, 10), button(300, 300), name='Editor'), pid=42))


class FakeGeometry:
	def __init__(self, clients: list[ClientRecord] | None = None, bounds: ScreenBounds | None = None):
		self._clients = clients or []
		self._bounds = bounds or ScreenBounds(2560, 1440)

	def clients(self) -> list[ClientRecord]:
		return self._clients

	def screen_bounds(self) -> ScreenBounds:
		return self._bounds


class OfflineGeometry:
	def clients(self) -> list[ClientRecord]:
		raise CompositorUnavailableError('HYPRLAND_INSTANCE_SIGNATURE is not set')

	def screen_bounds(self) -> ScreenBounds:
		raise CompositorUnavailableError('HYPRLAND_INSTANCE_SIGNATURE is not set')
