# @file purpose: Bounded walk of the accessibility tree that collects clickable, visible elements
"""
Target collection for wlim.

The accessible tree is external and untrusted: coordinates may be garbage,
child lists may be enormous, and any accessor can fail. The walk is therefore
bounded in depth and in the number of collected targets, and every failing
lookup only costs the node its own candidacy.
"""

import logging
from collections import deque
from collections.abc import Iterator

from wlim.accessibility.views import AccessibleNode, CollectionStats, Target, WindowGroup, is_clickable_role
from wlim.config import HintSettings
from wlim.geometry.views import Rect
from wlim.utils import time_execution_sync

logger = logging.getLogger(__name__)


class AccessibilityCollector:
	"""
	Walks desktop -> application -> window -> widgets and groups clickable
	targets by the window they came from.
	"""

	def __init__(self, settings: HintSettings | None = None):
		self.settings = settings or HintSettings()
		self.stats = CollectionStats()
		self._recent: deque[Rect] = deque(maxlen=self.settings.dedup_window)
		self._count = 0

	@time_execution_sync('--collect')
	def collect(self, desktop: AccessibleNode) -> list[WindowGroup]:
		"""
		Collect window groups from every application under the desktop root.

		Args:
			desktop: Desktop-level node whose children are applications

		Returns:
			Window groups in walk order; windows contributing no targets are omitted
		"""
		self._reset()
		groups: list[WindowGroup] = []

		for app in self._safe_children(desktop):
			app_pid = self._safe_pid(app)
			for window in self._safe_children(app):
				group = self.collect_window(window, owner_pid=app_pid, reset=False)
				if group.targets:
					groups.append(group)
				if self._stop_at_ceiling():
					break
			if self._stop_at_ceiling():
				break

		logger.debug(
			f'🌳 Walked {self.stats.visited_nodes} nodes: {self.stats.collected} targets in {len(groups)} windows '
			f'({self.stats.duplicates} duplicates, {self.stats.skipped_hidden} hidden, {self.stats.lookup_errors} lookup errors)'
		)
		return groups

	def collect_window(self, window: AccessibleNode, owner_pid: int | None = None, reset: bool = True) -> WindowGroup:
		"""Walk a single window subtree into one group."""
		if reset:
			self._reset()
		group = WindowGroup(owner_pid=owner_pid, owner_title=self._safe_name(window))
		self._walk(window, group.targets, depth=0)
		return group

	def get_collection_stats(self) -> CollectionStats:
		return self.stats

	@property
	def _full(self) -> bool:
		return self._count >= self.settings.max_targets

	def _stop_at_ceiling(self) -> bool:
		if self._full:
			self.stats.hit_target_ceiling = True
		return self._full

	def _reset(self) -> None:
		self.stats = CollectionStats()
		self._recent.clear()
		self._count = 0

	def _walk(self, node: AccessibleNode, out: list[Target], depth: int) -> None:
		if node is None or depth > self.settings.max_depth or self._full:
			return
		self.stats.visited_nodes += 1

		try:
			# The window root may itself report as not visible
			if depth > 0 and not (node.is_visible and node.is_showing):
				self.stats.skipped_hidden += 1
				return
			self._consider(node, out)
		except Exception as e:
			self.stats.lookup_errors += 1
			logger.debug(f'Skipping candidacy of node at depth {depth}: {type(e).__name__}: {e}')

		# Children past the depth ceiling are never fetched
		if depth >= self.settings.max_depth or self._stop_at_ceiling():
			return
		for child in self._safe_children(node):
			self._walk(child, out, depth + 1)
			if self._stop_at_ceiling():
				break

	def _consider(self, node: AccessibleNode, out: list[Target]) -> None:
		if not is_clickable_role(node.role):
			return
		bounds = node.bounds
		if bounds is None or not bounds.has_area:
			return
		if self._is_duplicate(bounds):
			self.stats.duplicates += 1
			return
		out.append(Target(bounds=bounds))
		self._recent.append(bounds)
		self._count += 1
		self.stats.collected += 1

	def _is_duplicate(self, bounds: Rect) -> bool:
		"""Near-identical origin to one of the last few accepted candidates."""
		radius = self.settings.dedup_radius
		return any(abs(seen.x - bounds.x) <= radius and abs(seen.y - bounds.y) <= radius for seen in self._recent)

	def _safe_children(self, node: AccessibleNode) -> Iterator[AccessibleNode]:
		"""Children pulled one at a time; a failing listing ends the iteration and counts as one lookup error."""
		try:
			children = iter(node.children or ())
		except Exception as e:
			self._children_failed(e)
			return
		while True:
			try:
				child = next(children)
			except StopIteration:
				return
			except Exception as e:
				self._children_failed(e)
				return
			yield child

	def _children_failed(self, error: Exception) -> None:
		self.stats.lookup_errors += 1
		logger.debug(f'Could not list children: {type(error).__name__}: {error}')

	@staticmethod
	def _safe_pid(node: AccessibleNode) -> int | None:
		try:
			pid = node.owner_pid
		except Exception:
			return None
		return pid if pid and pid > 0 else None

	@staticmethod
	def _safe_name(node: AccessibleNode) -> str | None:
		try:
			return node.name or None
		except Exception:
			return None


def collect_window_groups(desktop: AccessibleNode, settings: HintSettings | None = None) -> list[WindowGroup]:
	"""Convenience function to run one collection pass."""
	return AccessibilityCollector(settings).collect(desktop)
