from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
	x: int
	y: int

	def offset(self, dx: int, dy: int) -> 'Point':
		return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Size:
	width: int
	height: int

	@property
	def is_positive(self) -> bool:
		return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class Rect:
	"""Axis-aligned rectangle as reported by an accessible node (screen or window space)."""

	x: int
	y: int
	width: int
	height: int

	@property
	def origin(self) -> Point:
		return Point(self.x, self.y)

	@property
	def size(self) -> Size:
		return Size(self.width, self.height)

	@property
	def has_area(self) -> bool:
		return self.width > 0 and self.height > 0

	@property
	def at_zero_origin(self) -> bool:
		return self.x == 0 and self.y == 0

	def origin_inside(self, width: int, height: int) -> bool:
		"""Whether the origin falls in [0, width) x [0, height)."""
		return 0 <= self.x < width and 0 <= self.y < height


@dataclass(frozen=True)
class WindowGeometry:
	"""Authoritative window rectangle resolved from the compositor feed."""

	origin: Point
	size: Size

	@property
	def is_usable(self) -> bool:
		return self.size.is_positive

	@property
	def at_screen_origin(self) -> bool:
		return self.origin.x == 0 and self.origin.y == 0


@dataclass(frozen=True)
class ScreenBounds:
	"""Union of all monitor rectangles; only the actuation side cares about it."""

	width: int
	height: int


DEFAULT_SCREEN_BOUNDS = ScreenBounds(width=1920, height=1080)


@dataclass(frozen=True)
class ClientRecord:
	"""One window entry of the compositor's client feed."""

	pid: int
	title: str
	at: Point
	size: Size

	@property
	def geometry(self) -> WindowGeometry:
		return WindowGeometry(origin=self.at, size=self.size)


@dataclass(frozen=True)
class MonitorRecord:
	x: int
	y: int
	width: int
	height: int
