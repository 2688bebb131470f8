# @file purpose: Tests for the keystroke state machine
"""
Tests for KeystrokeMatcher.

Every transition is checked from the outside: the matcher is handed a state
and an event and must return a fresh state, so no test depends on call order.
"""

from wlim.accessibility.views import Target
from wlim.actuation.views import PointerButton
from wlim.geometry.views import Point, Rect
from wlim.hints.labels import assign_labels
from wlim.hints.matcher import KeystrokeMatcher
from wlim.hints.views import Backspace, Cancel, Cancelled, Character, MatchState, key_event_from_keyval


def labeled_targets(count: int) -> list[Target]:
	targets = [Target(bounds=Rect(10 * i, 10 * i, 5, 5), click_point=Point(10 * i + 2, 10 * i + 2)) for i in range(count)]
	return assign_labels(targets)


def type_keys(matcher: KeystrokeMatcher, keys: str, state: MatchState | None = None) -> MatchState:
	state = state or matcher.initial_state()
	for key in keys:
		state = matcher.transition(state, Character(key))
	return state


class TestSelection:
	def test_single_letter_selects(self):
		matcher = KeystrokeMatcher(labeled_targets(3))
		state = type_keys(matcher, 'a')
		assert state.is_terminal
		assert state.selection is not None
		assert state.selection.index == 0
		assert state.selection.button is PointerButton.PRIMARY
		assert state.selection.click_point == Point(2, 2)

	def test_unmatched_letter_resets(self):
		matcher = KeystrokeMatcher(labeled_targets(3))
		state = type_keys(matcher, 'd')
		assert state == MatchState()
		assert matcher.visible_count(state) == 3

	def test_two_letter_labels(self):
		matcher = KeystrokeMatcher(labeled_targets(30))
		state = type_keys(matcher, 'a')
		assert not state.is_terminal
		assert state.typed == 'a'
		assert matcher.visible_count(state) == 26

		state = type_keys(matcher, 'b', state)
		assert state.selection is not None
		assert state.selection.index == 1

	def test_reset_mid_label(self):
		matcher = KeystrokeMatcher(labeled_targets(30))
		state = type_keys(matcher, 'b')
		assert matcher.visible_count(state) == 4
		state = type_keys(matcher, 'e', state)
		assert state == MatchState()

		state = type_keys(matcher, 'bd', state)
		assert state.selection is not None
		assert state.selection.index == 29

	def test_modifiers_pick_the_button(self):
		matcher = KeystrokeMatcher(labeled_targets(3))
		shifted = matcher.transition(matcher.initial_state(), Character('b', shift=True))
		assert shifted.selection.button is PointerButton.SECONDARY
		ctrl = matcher.transition(matcher.initial_state(), Character('b', ctrl=True))
		assert ctrl.selection.button is PointerButton.MIDDLE
		both = matcher.transition(matcher.initial_state(), Character('b', shift=True, ctrl=True))
		assert both.selection.button is PointerButton.SECONDARY


class TestEditing:
	def test_backspace(self):
		matcher = KeystrokeMatcher(labeled_targets(30))
		state = type_keys(matcher, 'b')
		state = matcher.transition(state, Backspace())
		assert state == MatchState()

	def test_backspace_on_empty_is_noop(self):
		matcher = KeystrokeMatcher(labeled_targets(3))
		assert matcher.transition(MatchState(), Backspace()) == MatchState()

	def test_cancel(self):
		matcher = KeystrokeMatcher(labeled_targets(30))
		state = matcher.transition(type_keys(matcher, 'a'), Cancel())
		assert state.is_cancelled
		assert state.selection is None

	def test_terminal_states_absorb_events(self):
		matcher = KeystrokeMatcher(labeled_targets(3))
		selected = type_keys(matcher, 'a')
		assert matcher.transition(selected, Character('b')) is selected
		assert matcher.transition(selected, Cancel()) is selected

		cancelled = MatchState(outcome=Cancelled())
		assert matcher.transition(cancelled, Character('a')) is cancelled

	def test_non_letters_ignored(self):
		matcher = KeystrokeMatcher(labeled_targets(30))
		state = type_keys(matcher, 'a')
		for key in ('1', 'A', ' ', 'é', 'ab'):
			assert matcher.transition(state, Character(key)) == state

	def test_max_typed(self):
		matcher = KeystrokeMatcher(labeled_targets(30), max_typed=1)
		state = type_keys(matcher, 'ab')
		assert state == MatchState(typed='a')


class TestProjection:
	def test_projection_splits_typed_part(self):
		matcher = KeystrokeMatcher(labeled_targets(30))
		hints = matcher.project(type_keys(matcher, 'b'))

		assert len(hints) == 30
		assert [h.label for h in hints if h.visible] == ['ba', 'bb', 'bc', 'bd']
		shown = hints[27]
		assert (shown.typed_part, shown.remaining_part) == ('b', 'b')
		hidden = hints[0]
		assert not hidden.visible
		assert hidden.typed_part == ''

	def test_initial_projection_shows_everything(self):
		matcher = KeystrokeMatcher(labeled_targets(5))
		hints = matcher.project(matcher.initial_state())
		assert all(h.visible and h.typed_part == '' for h in hints)


class TestKeyEvents:
	def test_from_keyval(self):
		assert key_event_from_keyval('Escape') == Cancel()
		assert key_event_from_keyval('BackSpace') == Backspace()
		assert key_event_from_keyval('a') == Character('a')
		assert key_event_from_keyval('a', ctrl=True) == Character('a', ctrl=True)
		assert key_event_from_keyval('A') == Character('a', shift=True)
		assert key_event_from_keyval('Return') is None
		assert key_event_from_keyval('1') is None
