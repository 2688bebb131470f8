import logging
import sys

from wlim.config import CONFIG

_LEVELS = {
	'debug': logging.DEBUG,
	'info': logging.INFO,
	'warning': logging.WARNING,
	'error': logging.ERROR,
}


class WlimFormatter(logging.Formatter):
	"""Shortens `wlim.foo.bar` logger names to `foo.bar` and prefixes every line with [wlim]."""

	def format(self, record: logging.LogRecord) -> str:
		if isinstance(record.name, str) and record.name.startswith('wlim.'):
			record.name = record.name[len('wlim.') :]
		return super().format(record)


def setup_logging(stream=None, log_level: str | None = None, force_setup: bool = False) -> logging.Logger:
	"""Install the stderr handler on the `wlim` logger.

	Args:
		stream: Output stream for logs (default: sys.stderr)
		log_level: Overrides WLIM_LOGGING_LEVEL when given
		force_setup: Replace an existing handler instead of returning early
	"""
	wlim_logger = logging.getLogger('wlim')
	if wlim_logger.handlers and not force_setup:
		return wlim_logger

	level_name = (log_level or CONFIG.WLIM_LOGGING_LEVEL or 'info').lower()
	level = _LEVELS.get(level_name, logging.INFO)

	for handler in list(wlim_logger.handlers):
		wlim_logger.removeHandler(handler)

	console = logging.StreamHandler(stream or sys.stderr)
	console.setFormatter(WlimFormatter('[wlim] %(levelname)-8s %(name)s: %(message)s'))
	wlim_logger.addHandler(console)
	wlim_logger.setLevel(level)
	wlim_logger.propagate = False

	wlim_logger.debug(f'Logging configured at level {level_name}')
	return wlim_logger
