from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable

from wlim.geometry.views import Point, Rect


class Role(str, Enum):
	"""AT-SPI role names (lowercase, space separated) that matter to discovery."""

	# Clickable
	PUSH_BUTTON = 'push button'
	TOGGLE_BUTTON = 'toggle button'
	CHECK_BOX = 'check box'
	RADIO_BUTTON = 'radio button'
	MENU_ITEM = 'menu item'
	LINK = 'link'
	PAGE_TAB = 'page tab'
	COMBO_BOX = 'combo box'
	ENTRY = 'entry'
	SPIN_BUTTON = 'spin button'
	SLIDER = 'slider'
	ICON = 'icon'
	LIST_ITEM = 'list item'
	TABLE_CELL = 'table cell'
	TREE_ITEM = 'tree item'
	TOOL_BAR = 'tool bar'
	TEXT = 'text'
	DOCUMENT_WEB = 'document web'

	# Structural
	DESKTOP_FRAME = 'desktop frame'
	APPLICATION = 'application'
	FRAME = 'frame'
	WINDOW = 'window'
	DIALOG = 'dialog'
	PANEL = 'panel'
	FILLER = 'filler'
	LABEL = 'label'
	UNKNOWN = 'unknown'


# Plain strings so that nodes reporting raw role names compare equal
CLICKABLE_ROLES: frozenset[str] = frozenset(
	role.value
	for role in (
		Role.PUSH_BUTTON,
		Role.TOGGLE_BUTTON,
		Role.CHECK_BOX,
		Role.RADIO_BUTTON,
		Role.MENU_ITEM,
		Role.LINK,
		Role.PAGE_TAB,
		Role.COMBO_BOX,
		Role.ENTRY,
		Role.SPIN_BUTTON,
		Role.SLIDER,
		Role.ICON,
		Role.LIST_ITEM,
		Role.TABLE_CELL,
		Role.TREE_ITEM,
		Role.TOOL_BAR,
		Role.TEXT,
		Role.DOCUMENT_WEB,
	)
)


def role_name(role: 'Role | str | None') -> str:
	"""Normalise a role (enum member, raw AT-SPI name or dashed name) to the space separated form."""
	if role is None:
		return Role.UNKNOWN.value
	if isinstance(role, Role):
		return role.value
	return str(role).strip().lower().replace('-', ' ').replace('_', ' ')


def is_clickable_role(role: 'Role | str | None') -> bool:
	return role_name(role) in CLICKABLE_ROLES


@runtime_checkable
class AccessibleNode(Protocol):
	"""Read-only view of one accessible object. Any accessor may raise on a misbehaving backend."""

	@property
	def role(self) -> Role | str: ...

	@property
	def bounds(self) -> Rect | None: ...

	@property
	def is_visible(self) -> bool: ...

	@property
	def is_showing(self) -> bool: ...

	@property
	def children(self) -> Iterable['AccessibleNode']: ...

	@property
	def owner_pid(self) -> int | None: ...

	@property
	def name(self) -> str | None: ...


@dataclass
class Target:
	"""One clickable element. Coordinates stay in the source's space until normalisation rewrites the points."""

	bounds: Rect
	click_point: Point | None = None
	anchor_point: Point | None = None
	_label: str | None = field(default=None, repr=False)

	@property
	def label(self) -> str | None:
		return self._label

	def assign_label(self, label: str) -> None:
		if not label:
			raise ValueError('Target label must be non-empty')
		if self._label is not None:
			raise ValueError(f'Target already labeled {self._label!r}')
		self._label = label

	def place(self, click_point: Point, anchor_point: Point) -> None:
		self.click_point = click_point
		self.anchor_point = anchor_point

	def to_dict(self) -> dict:
		return {
			'label': self._label,
			'bounds': {'x': self.bounds.x, 'y': self.bounds.y, 'width': self.bounds.width, 'height': self.bounds.height},
			'click': [self.click_point.x, self.click_point.y] if self.click_point else None,
			'anchor': [self.anchor_point.x, self.anchor_point.y] if self.anchor_point else None,
		}


@dataclass
class WindowGroup:
	"""The contiguous run of targets collected from one accessible window."""

	targets: list[Target] = field(default_factory=list)
	owner_pid: int | None = None
	owner_title: str | None = None

	def __len__(self) -> int:
		return len(self.targets)


@dataclass
class CollectionStats:
	"""Statistics about the last tree walk"""

	visited_nodes: int = 0
	skipped_hidden: int = 0
	lookup_errors: int = 0
	duplicates: int = 0
	collected: int = 0
	hit_target_ceiling: bool = False
