"""
Hint selection session.

Runs discovery (collect -> normalise -> label) synchronously, then drives the
keystroke matcher from an asynchronous key stream, talking to the overlay and
to the pointer injector only through events on the session's bus.
"""

import asyncio
import logging
from collections.abc import AsyncIterable, Callable
from typing import Protocol
from uuid import uuid4

from bubus import EventBus

from wlim.accessibility.collector import AccessibilityCollector
from wlim.accessibility.views import AccessibleNode, Target
from wlim.actuation.events import ClickEvent
from wlim.config import HintSettings
from wlim.geometry.normalizer import GeometryNormalizer
from wlim.geometry.views import ClientRecord, ScreenBounds
from wlim.hints.labels import assign_labels
from wlim.hints.matcher import KeystrokeMatcher
from wlim.hints.views import Cancel, KeyEvent, MatchState
from wlim.session.events import HideHintsEvent, HintsUpdatedEvent, ShowHintsEvent
from wlim.session.views import CompositorUnavailableError, NoTargetsFoundError

logger = logging.getLogger(__name__)


class GeometrySource(Protocol):
	def clients(self) -> list[ClientRecord]: ...

	def screen_bounds(self) -> ScreenBounds: ...


class HintSession:
	"""One discovery pass followed by at most one interactive selection."""

	def __init__(
		self,
		tree: AccessibleNode | Callable[[], AccessibleNode],
		geometry: GeometrySource | None = None,
		settings: HintSettings | None = None,
		event_bus: EventBus | None = None,
	):
		self._tree = tree
		self.geometry = geometry
		self.settings = settings or HintSettings()
		self.event_bus = event_bus or EventBus(name=f'HintSession_{uuid4().hex[-4:]}')
		self.targets: list[Target] = []
		self.matcher: KeystrokeMatcher | None = None
		self.state: MatchState = KeystrokeMatcher.initial_state()

	def _root(self) -> AccessibleNode:
		return self._tree() if callable(self._tree) else self._tree

	def _clients(self) -> list[ClientRecord]:
		if self.geometry is None:
			return []
		try:
			return self.geometry.clients()
		except CompositorUnavailableError as e:
			logger.warning(f'⚠️ No window geometry available, coordinates will not be repaired: {e}')
			return []

	def _screen_bounds(self) -> ScreenBounds | None:
		if self.geometry is None:
			return None
		try:
			return self.geometry.screen_bounds()
		except CompositorUnavailableError as e:
			logger.warning(f'⚠️ Screen bounds unavailable: {e}')
			return None

	def discover(self) -> list[Target]:
		"""
		Collect, repair and label every clickable target on screen.

		Raises:
			NoTargetsFoundError: when nothing survives collection and repair
		"""
		groups = AccessibilityCollector(self.settings).collect(self._root())
		clients = self._clients()
		targets = GeometryNormalizer(clients, self.settings).normalize(groups)
		if not targets:
			raise NoTargetsFoundError('no clickable elements found', details={'windows': len(groups), 'clients': len(clients)})

		assign_labels(targets)
		self.targets = targets
		self.matcher = KeystrokeMatcher(targets, max_typed=self.settings.max_typed)
		self.state = KeystrokeMatcher.initial_state()
		logger.info(f'🏷️ Labeled {len(targets)} targets across {len(groups)} windows')
		return targets

	async def run(self, keys: AsyncIterable[KeyEvent]) -> MatchState:
		"""
		Drive the matcher until a selection, a cancel, or the end of the key stream.

		The overlay is hidden (and the hide awaited) before the settle delay and
		the single ClickEvent, so the click never lands on the overlay itself.
		"""
		if self.matcher is None:
			self.discover()
		assert self.matcher is not None
		matcher = self.matcher

		state = matcher.initial_state()
		await self.event_bus.dispatch(ShowHintsEvent(hints=matcher.project(state)))

		# The overlay comes down however the key stream ends, errors included
		try:
			async for key in keys:
				state = matcher.transition(state, key)
				if state.is_terminal:
					break
				await self.event_bus.dispatch(HintsUpdatedEvent(typed=state.typed, hints=matcher.project(state)))
		finally:
			if not state.is_terminal:
				logger.debug('Key stream ended without a selection')
				state = matcher.transition(state, Cancel())
			self.state = state
			await self.event_bus.dispatch(HideHintsEvent(selected=state.selection is not None))

		selection = state.selection

		if selection is None or selection.click_point is None:
			return state

		await asyncio.sleep(self.settings.settle_delay)
		point = selection.click_point
		bounds = self._screen_bounds()
		logger.debug(f'🖱️ {selection.button.value}-click on "{selection.target.label}" at ({point.x},{point.y})')
		await self.event_bus.dispatch(
			ClickEvent(
				x=point.x,
				y=point.y,
				button=selection.button,
				screen_width=bounds.width if bounds else None,
				screen_height=bounds.height if bounds else None,
			)
		)
		return state

	async def stop(self) -> None:
		await self.event_bus.stop()
