"""Events exchanged between a hint session and the overlay that draws it."""

from bubus import BaseEvent

from wlim.hints.views import HintProjection


class ShowHintsEvent(BaseEvent[None]):
	"""Present the overlay with every hint visible."""

	hints: list[HintProjection]

	event_timeout: float | None = 10.0


class HintsUpdatedEvent(BaseEvent[None]):
	"""The typed prefix changed; redraw with the new visibility and highlighting."""

	typed: str
	hints: list[HintProjection]

	event_timeout: float | None = 5.0


class HideHintsEvent(BaseEvent[None]):
	"""Tear the overlay down. Handlers must have removed it from screen before returning."""

	selected: bool = False

	event_timeout: float | None = 10.0
