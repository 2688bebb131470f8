"""Pointer actuation requests emitted by wlim for an external input injector."""

from bubus import BaseEvent

from wlim.actuation.views import PointerButton


class ClickEvent(BaseEvent[None]):
	"""Click at a screen-absolute pixel position. Any device-specific rescaling is the handler's job."""

	x: int
	y: int
	button: PointerButton = PointerButton.PRIMARY
	screen_width: int | None = None
	screen_height: int | None = None

	event_timeout: float | None = 5.0


class ScrollEvent(BaseEvent[None]):
	"""
	Wheel steps; positive vertical scrolls down, positive horizontal scrolls left.

	Boundary type for injectors that also serve a scroll mode. Hint sessions
	never emit it.
	"""

	vertical_steps: int = 0
	horizontal_steps: int = 0

	event_timeout: float | None = 5.0
