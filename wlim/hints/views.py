from dataclasses import dataclass

from wlim.accessibility.views import Target
from wlim.actuation.views import PointerButton
from wlim.geometry.views import Point


# Key events delivered by the overlay
@dataclass(frozen=True)
class Character:
	char: str
	shift: bool = False
	ctrl: bool = False

	@property
	def button(self) -> PointerButton:
		if self.shift:
			return PointerButton.SECONDARY
		if self.ctrl:
			return PointerButton.MIDDLE
		return PointerButton.PRIMARY


@dataclass(frozen=True)
class Backspace:
	pass


@dataclass(frozen=True)
class Cancel:
	pass


KeyEvent = Character | Backspace | Cancel


def key_event_from_keyval(name: str, shift: bool = False, ctrl: bool = False) -> KeyEvent | None:
	"""
	Translate a toolkit key name into a matcher event.

	'Escape' cancels and 'BackSpace' deletes. Single ASCII letters become
	characters, upper case being folded to lower case with shift held.
	Anything else gives None and should be ignored by the caller.
	"""
	if name == 'Escape':
		return Cancel()
	if name == 'BackSpace':
		return Backspace()
	if len(name) == 1 and name.isascii() and name.isalpha():
		if name.isupper():
			return Character(name.lower(), shift=True, ctrl=ctrl)
		return Character(name, shift=shift, ctrl=ctrl)
	return None


# Outcomes
@dataclass(frozen=True)
class Selection:
	index: int
	target: Target
	button: PointerButton = PointerButton.PRIMARY

	@property
	def click_point(self) -> Point | None:
		return self.target.click_point


@dataclass(frozen=True)
class Cancelled:
	pass


@dataclass(frozen=True)
class MatchState:
	"""Typed prefix plus the terminal outcome, if any. Replaced, never mutated, on each transition."""

	typed: str = ''
	outcome: Selection | Cancelled | None = None

	@property
	def is_terminal(self) -> bool:
		return self.outcome is not None

	@property
	def selection(self) -> Selection | None:
		return self.outcome if isinstance(self.outcome, Selection) else None

	@property
	def is_cancelled(self) -> bool:
		return isinstance(self.outcome, Cancelled)


@dataclass(frozen=True)
class HintProjection:
	"""What the overlay needs to draw one hint."""

	label: str
	anchor_point: Point | None
	visible: bool
	typed_length: int

	@property
	def typed_part(self) -> str:
		return self.label[: self.typed_length] if self.visible else ''

	@property
	def remaining_part(self) -> str:
		return self.label[self.typed_length :] if self.visible else self.label
