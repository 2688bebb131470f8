from .events import ClickEvent, ScrollEvent
from .views import PointerButton, clamp_to_screen

__all__ = [
	'ClickEvent',
	'ScrollEvent',
	'PointerButton',
	'clamp_to_screen',
]
