# @file purpose: Keystroke state machine that resolves typed input to exactly one labeled target
"""
Incremental label matching.

The matcher holds the labeled targets of one session and nothing else: every
transition takes the previous MatchState and a key event and returns a new
MatchState, so the caller owns the session state.

Transitions:
	Cancel              -> Cancelled (terminal)
	Backspace           -> drop the last typed character (no-op when empty)
	Character(c)        -> typed + c; a unique exact label match selects it
	                       (terminal), no label starting with typed + c resets
	                       to the empty prefix, anything else keeps typing
Terminal states absorb every further event.
"""

import logging
from collections.abc import Sequence

from wlim.accessibility.views import Target
from wlim.hints.views import (
	Backspace,
	Cancel,
	Cancelled,
	Character,
	HintProjection,
	KeyEvent,
	MatchState,
	Selection,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_TYPED = 8


class KeystrokeMatcher:
	def __init__(self, targets: Sequence[Target], max_typed: int = DEFAULT_MAX_TYPED):
		self.targets = list(targets)
		self.max_typed = max_typed

	@staticmethod
	def initial_state() -> MatchState:
		return MatchState()

	def transition(self, state: MatchState, event: KeyEvent) -> MatchState:
		if state.is_terminal:
			return state

		if isinstance(event, Cancel):
			logger.debug('Selection cancelled')
			return MatchState(typed=state.typed, outcome=Cancelled())

		if isinstance(event, Backspace):
			if not state.typed:
				return state
			return MatchState(typed=state.typed[:-1])

		if isinstance(event, Character):
			return self._type_character(state, event)

		return state

	def _type_character(self, state: MatchState, event: Character) -> MatchState:
		char = event.char
		if len(char) != 1 or not ('a' <= char <= 'z'):
			return state
		if len(state.typed) >= self.max_typed:
			return state

		candidate = state.typed + char
		matches = [i for i, t in enumerate(self.targets) if t.label == candidate]
		if len(matches) == 1:
			index = matches[0]
			logger.debug(f'🎯 "{candidate}" selects target #{index} with the {event.button.value} button')
			return MatchState(
				typed=candidate,
				outcome=Selection(index=index, target=self.targets[index], button=event.button),
			)

		if not any(t.label and t.label.startswith(candidate) for t in self.targets):
			logger.debug(f'No label starts with "{candidate}", starting over')
			return MatchState()

		return MatchState(typed=candidate)

	def project(self, state: MatchState) -> list[HintProjection]:
		"""Per-target visibility and typed/remaining split for the current prefix."""
		typed = state.typed
		return [
			HintProjection(
				label=t.label or '',
				anchor_point=t.anchor_point,
				visible=bool(t.label) and t.label.startswith(typed),
				typed_length=len(typed),
			)
			for t in self.targets
		]

	def visible_count(self, state: MatchState) -> int:
		return sum(1 for hint in self.project(state) if hint.visible)
