from enum import Enum

from wlim.geometry.views import Point, ScreenBounds


class PointerButton(str, Enum):
	PRIMARY = 'primary'
	SECONDARY = 'secondary'
	MIDDLE = 'middle'


def clamp_to_screen(point: Point, bounds: ScreenBounds) -> Point:
	"""Keep a click inside [0, width) x [0, height) for injectors with a bounded absolute axis."""
	return Point(
		min(max(point.x, 0), max(bounds.width - 1, 0)),
		min(max(point.y, 0), max(bounds.height - 1, 0)),
	)
