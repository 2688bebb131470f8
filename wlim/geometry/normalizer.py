# @file purpose: Detects and repairs broken or window-relative accessibility coordinates per window
"""
Geometry normalisation for wlim.

Accessibility backends disagree about coordinates. Some toolkits report every
element at (0, 0); some browsers report positions relative to their own window
instead of the screen. For each window group we pick one repair strategy from
the raw bounds, using the compositor's window rectangle as ground truth, then
rewrite every target's click and anchor points.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum

from wlim.accessibility.views import Target, WindowGroup
from wlim.config import HintSettings
from wlim.geometry.views import ClientRecord, Point, WindowGeometry
from wlim.utils import time_execution_sync

logger = logging.getLogger(__name__)


class RepairStrategy(Enum):
	GRID = 'grid'
	WINDOW_RELATIVE = 'window_relative'
	ABSOLUTE = 'absolute'
	DROP = 'drop'


@dataclass
class RepairDecision:
	strategy: RepairStrategy
	geometry: WindowGeometry | None
	offset: Point = Point(0, 0)
	zero_fraction: float = 0.0
	inside_fraction: float | None = None


def titles_match(a: str | None, b: str | None, prefix_min: int = 10, common_min: int = 20) -> bool:
	"""
	Whether two window titles name the same window.

	Either title containing the other is a match. Otherwise the titles match if
	the shorter one is a prefix of the longer and longer than `prefix_min`, or
	if they share a leading run of at least `common_min` characters (browser
	titles grow suffixes such as " - Audio playing").
	"""
	if not a or not b:
		return False
	if a in b or b in a:
		return True
	shortest = min(len(a), len(b))
	if shortest > prefix_min and a[:shortest] == b[:shortest]:
		return True
	common = 0
	while common < shortest and a[common] == b[common]:
		common += 1
	return common >= common_min


class GeometryNormalizer:
	"""Resolves each window group against the compositor feed and rewrites target points."""

	def __init__(self, clients: list[ClientRecord] | None = None, settings: HintSettings | None = None):
		self.clients = clients or []
		self.settings = settings or HintSettings()

	def resolve_window_geometry(self, owner_pid: int | None, owner_title: str | None) -> WindowGeometry | None:
		"""Window rectangle by exact pid first, then by title similarity."""
		if owner_pid is not None and owner_pid > 0:
			for client in self.clients:
				if client.pid == owner_pid:
					return client.geometry
		if owner_title:
			for client in self.clients:
				if titles_match(
					client.title,
					owner_title,
					prefix_min=self.settings.title_prefix_min,
					common_min=self.settings.title_common_min,
				):
					return client.geometry
		return None

	def decide(self, targets: list[Target], geometry: WindowGeometry | None) -> RepairDecision:
		"""Pick the repair strategy from the raw, not yet repaired bounds."""
		count = len(targets)
		zeros = sum(1 for t in targets if t.bounds.at_zero_origin)
		zero_fraction = zeros / count if count else 0.0

		# Broken-coordinate check runs before the window-relative one
		if count and zero_fraction >= self.settings.broken_zero_ratio:
			if geometry is not None and geometry.is_usable:
				return RepairDecision(RepairStrategy.GRID, geometry, zero_fraction=zero_fraction)
			return RepairDecision(RepairStrategy.DROP, geometry, zero_fraction=zero_fraction)

		if count and geometry is not None and geometry.is_usable and not geometry.at_screen_origin:
			width, height = geometry.size.width, geometry.size.height
			inside = sum(1 for t in targets if t.bounds.origin_inside(width, height))
			inside_fraction = inside / count
			if inside_fraction >= self.settings.window_relative_ratio:
				return RepairDecision(
					RepairStrategy.WINDOW_RELATIVE,
					geometry,
					offset=geometry.origin,
					zero_fraction=zero_fraction,
					inside_fraction=inside_fraction,
				)
			return RepairDecision(RepairStrategy.ABSOLUTE, geometry, zero_fraction=zero_fraction, inside_fraction=inside_fraction)

		return RepairDecision(RepairStrategy.ABSOLUTE, geometry, zero_fraction=zero_fraction)

	def normalize_group(self, group: WindowGroup) -> list[Target]:
		"""
		Repair one group in place.

		Returns:
			The group's targets with points set, or an empty list when the group is dropped
		"""
		if not group.targets:
			return []

		geometry = self.resolve_window_geometry(group.owner_pid, group.owner_title)
		if geometry is not None:
			logger.debug(
				f'🪟 Window "{group.owner_title or "?"}": {len(group)} targets, geometry at=({geometry.origin.x},{geometry.origin.y}) '
				f'size=({geometry.size.width},{geometry.size.height}) pid={group.owner_pid}'
			)
		else:
			logger.debug(f'🪟 Window "{group.owner_title or "?"}": {len(group)} targets, no geometry found (pid={group.owner_pid})')

		decision = self.decide(group.targets, geometry)
		if decision.inside_fraction is not None:
			logger.debug(f'   window-relative fraction {decision.inside_fraction:.0%}')

		if decision.strategy is RepairStrategy.DROP:
			logger.debug(f'   dropping {len(group)} targets with unusable coordinates')
			group.targets.clear()
			return []

		if decision.strategy is RepairStrategy.GRID:
			assert decision.geometry is not None
			self._layout_grid(group.targets, decision.geometry)
		else:
			if decision.strategy is RepairStrategy.WINDOW_RELATIVE:
				logger.debug(f'   applying offset ({decision.offset.x},{decision.offset.y})')
			self._apply_offset(group.targets, decision.offset)

		return group.targets

	@time_execution_sync('--normalize')
	def normalize(self, groups: list[WindowGroup]) -> list[Target]:
		"""Repair every group and flatten them, in order, into one target list."""
		targets: list[Target] = []
		for group in groups:
			targets.extend(self.normalize_group(group))
		return targets

	def _apply_offset(self, targets: list[Target], offset: Point) -> None:
		inset_x, inset_y = self.settings.anchor_inset
		for target in targets:
			b = target.bounds
			origin = b.origin.offset(offset.x, offset.y)
			target.place(
				click_point=origin.offset(b.width // 2, b.height // 2),
				anchor_point=origin.offset(inset_x, inset_y),
			)

	def _layout_grid(self, targets: list[Target], geometry: WindowGeometry) -> None:
		"""Spread targets over a row-major grid inset from the window edges."""
		count = len(targets)
		margin = self.settings.grid_margin
		left = geometry.origin.x + margin
		top = geometry.origin.y + margin
		width = geometry.size.width - 2 * margin
		height = geometry.size.height - 2 * margin
		cols = math.ceil(math.sqrt(count))
		rows = math.ceil(count / cols)
		cell_w = width / cols
		cell_h = height / rows
		logger.debug(f'   laying out {count} targets on a {cols}x{rows} grid')
		for index, target in enumerate(targets):
			point = Point(
				int(left + (index % cols) * cell_w + cell_w / 2),
				int(top + (index // cols) * cell_h + cell_h / 2),
			)
			target.place(click_point=point, anchor_point=point)
