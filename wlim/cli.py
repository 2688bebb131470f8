"""
Command line entry point.

	wlim targets [--json]          discover and print every labeled target
	wlim select KEYS [--dry-run]   replay KEYS through a hint session

In KEYS, letters are typed as-is (upper case means shift, i.e. a right click),
'<' is backspace and '!' cancels.
"""

import asyncio
import json
import logging
import subprocess
import sys
from collections.abc import AsyncIterator

import click

from wlim.accessibility.atspi import desktop_root
from wlim.actuation.events import ClickEvent
from wlim.actuation.views import clamp_to_screen
from wlim.compositor.hyprland import HyprlandIPC
from wlim.config import CONFIG
from wlim.geometry.views import Point, ScreenBounds
from wlim.hints.views import Backspace, Cancel, KeyEvent, key_event_from_keyval
from wlim.logging_config import setup_logging
from wlim.session.events import HideHintsEvent, HintsUpdatedEvent, ShowHintsEvent
from wlim.session.service import HintSession
from wlim.session.views import NoTargetsFoundError

logger = logging.getLogger('wlim.cli')


def notify(message: str) -> None:
	"""Best-effort desktop notification."""
	try:
		subprocess.run(['notify-send', '-t', '3000', 'wlim', message], check=False, timeout=5)
	except (OSError, subprocess.SubprocessError) as e:
		logger.debug(f'notify-send failed: {e}')


def parse_keys(keys: str) -> list[KeyEvent]:
	"""Turn a KEYS argument into matcher events; unknown characters are skipped."""
	events: list[KeyEvent] = []
	for char in keys:
		if char == '<':
			events.append(Backspace())
		elif char == '!':
			events.append(Cancel())
		else:
			event = key_event_from_keyval(char)
			if event is not None:
				events.append(event)
	return events


async def _replay(events: list[KeyEvent]) -> AsyncIterator[KeyEvent]:
	for event in events:
		yield event


def _build_session() -> HintSession:
	return HintSession(desktop_root, HyprlandIPC(), settings=CONFIG.hints)


def _discover_or_exit(session: HintSession) -> None:
	try:
		session.discover()
	except NoTargetsFoundError as e:
		logger.error(f'❌ {e}')
		notify('no clickable elements found')
		sys.exit(1)


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
def main(debug: bool) -> None:
	"""Vimium-like click hints for Wayland."""
	setup_logging(log_level='debug' if debug else None)


@main.command()
@click.option('--json', 'as_json', is_flag=True, help='Print targets as JSON')
def targets(as_json: bool) -> None:
	"""Discover, repair and label every clickable target on screen."""
	session = _build_session()
	_discover_or_exit(session)

	if as_json:
		click.echo(json.dumps([t.to_dict() for t in session.targets], indent=2))
		return
	for target in session.targets:
		click_point = f'({target.click_point.x},{target.click_point.y})' if target.click_point else '-'
		click.echo(f'{target.label}\t{click_point}\t{target.bounds.width}x{target.bounds.height}')


@main.command()
@click.argument('keys')
@click.option('--dry-run', is_flag=True, help='Log the click instead of writing it to stdout')
def select(keys: str, dry_run: bool) -> None:
	"""Replay KEYS through one hint session."""
	session = _build_session()
	_discover_or_exit(session)

	def on_show(event: ShowHintsEvent) -> None:
		logger.debug(f'👁️ Showing {len(event.hints)} hints')

	def on_update(event: HintsUpdatedEvent) -> None:
		visible = sum(1 for hint in event.hints if hint.visible)
		logger.debug(f'⌨️ Typed "{event.typed}", {visible} hints visible')

	def on_hide(event: HideHintsEvent) -> None:
		logger.debug(f'🙈 Hints hidden (selected={event.selected})')

	def on_click(event: ClickEvent) -> None:
		point = Point(event.x, event.y)
		if event.screen_width and event.screen_height:
			point = clamp_to_screen(point, ScreenBounds(event.screen_width, event.screen_height))
		if dry_run:
			logger.info(f'🖱️ Would {event.button.value}-click at ({point.x},{point.y})')
			return
		# One line per click for the injector reading our stdout
		click.echo(f'click {event.button.value} {point.x} {point.y}')

	session.event_bus.on(ShowHintsEvent, on_show)
	session.event_bus.on(HintsUpdatedEvent, on_update)
	session.event_bus.on(HideHintsEvent, on_hide)
	session.event_bus.on(ClickEvent, on_click)

	async def run() -> None:
		try:
			state = await session.run(_replay(parse_keys(keys)))
		finally:
			await session.stop()
		if state.selection is None:
			click.echo('cancelled')

	asyncio.run(run())


if __name__ == '__main__':
	main()
