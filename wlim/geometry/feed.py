# @file purpose: Tolerant field extraction from the compositor's JSON-like geometry feed
"""
Geometry feed parsing for wlim.

The compositor hands us window and monitor records as a flat JSON-ish text
blob. We never run it through a real JSON parser: the feed is treated as best
effort, so every accessor here degrades to a default instead of raising.
"""

import re
from collections.abc import Iterator

from wlim.geometry.views import (
	DEFAULT_SCREEN_BOUNDS,
	ClientRecord,
	MonitorRecord,
	Point,
	ScreenBounds,
	Size,
)

MAX_STRING_LENGTH = 255

_INT_RE = re.compile(r'\s*([+-]?\d+)')

_ESCAPES = {
	'"': '"',
	'\\': '\\',
	'/': '/',
	'n': '\n',
	't': '\t',
}


class FieldExtractor:
	"""Reads scalar, pair and block fields out of a geometry feed blob."""

	@staticmethod
	def _value_start(blob: str, key: str) -> int | None:
		"""Index just past `"key":` and any spaces or tabs, or None when the key is absent."""
		pattern = f'"{key}":'
		pos = blob.find(pattern)
		if pos < 0:
			return None
		pos += len(pattern)
		while pos < len(blob) and blob[pos] in ' \t':
			pos += 1
		return pos

	@staticmethod
	def _read_int(blob: str, pos: int) -> int | None:
		match = _INT_RE.match(blob, pos)
		if not match:
			return None
		return int(match.group(1))

	@staticmethod
	def int_field(blob: str, key: str, default: int) -> int:
		"""Integer value of `key`, or `default` when absent or unparseable."""
		pos = FieldExtractor._value_start(blob, key)
		if pos is None:
			return default
		value = FieldExtractor._read_int(blob, pos)
		return default if value is None else value

	@staticmethod
	def str_field(blob: str, key: str, max_length: int = MAX_STRING_LENGTH) -> str:
		"""
		String value of `key` with JSON escapes undone.

		`\\"`, `\\\\`, `\\/`, `\\n` and `\\t` are unescaped; any other escape passes
		the following character through literally. The result is cut at
		`max_length` characters. Absent keys and non-string values give ''.
		"""
		pos = FieldExtractor._value_start(blob, key)
		if pos is None or pos >= len(blob) or blob[pos] != '"':
			return ''
		pos += 1
		out: list[str] = []
		while pos < len(blob) and blob[pos] != '"' and len(out) < max_length:
			char = blob[pos]
			if char == '\\' and pos + 1 < len(blob):
				escaped = blob[pos + 1]
				out.append(_ESCAPES.get(escaped, escaped))
				pos += 2
			else:
				out.append(char)
				pos += 1
		return ''.join(out)

	@staticmethod
	def int_pair_field(blob: str, key: str) -> tuple[int, int]:
		"""The two integers of a `[a, b]` array field; (0, 0) when absent."""
		pos = FieldExtractor._value_start(blob, key)
		if pos is None:
			return 0, 0
		bracket = blob.find('[', pos)
		if bracket < 0:
			pos = len(blob)
		else:
			pos = bracket + 1
		first = FieldExtractor._read_int(blob, pos)
		comma = blob.find(',', pos)
		pos = len(blob) if comma < 0 else comma + 1
		second = FieldExtractor._read_int(blob, pos)
		return first or 0, second or 0

	@staticmethod
	def block_end(blob: str, start: int) -> int | None:
		"""
		Index of the `}` closing the object that opens at or after `start`.

		Braces inside quoted strings are ignored, and a backslash inside a string
		skips the next character. Returns None if the object never closes.
		"""
		depth = 0
		in_string = False
		pos = start
		length = len(blob)
		while pos < length:
			char = blob[pos]
			if in_string:
				if char == '\\':
					pos += 2
					continue
				if char == '"':
					in_string = False
			elif char == '"':
				in_string = True
			elif char == '{':
				depth += 1
			elif char == '}' and depth > 0:
				depth -= 1
				if depth == 0:
					return pos
			pos += 1
		return None

	@staticmethod
	def block_at(blob: str, start: int = 0) -> str | None:
		"""Substring of the first `{...}` object beginning at or after `start`."""
		opening = blob.find('{', start)
		if opening < 0:
			return None
		end = FieldExtractor.block_end(blob, opening)
		if end is None:
			return None
		return blob[opening : end + 1]


def iter_blocks(blob: str | None) -> Iterator[str]:
	"""Yield each outermost `{...}` record of the feed in order, stopping at the first unclosed one."""
	if not blob:
		return
	pos = 0
	while True:
		opening = blob.find('{', pos)
		if opening < 0:
			return
		end = FieldExtractor.block_end(blob, opening)
		if end is None:
			return
		yield blob[opening : end + 1]
		pos = end + 1


def parse_client(block: str) -> ClientRecord:
	at_x, at_y = FieldExtractor.int_pair_field(block, 'at')
	width, height = FieldExtractor.int_pair_field(block, 'size')
	return ClientRecord(
		pid=FieldExtractor.int_field(block, 'pid', -1),
		title=FieldExtractor.str_field(block, 'title'),
		at=Point(at_x, at_y),
		size=Size(width, height),
	)


def parse_clients(blob: str | None) -> list[ClientRecord]:
	return [parse_client(block) for block in iter_blocks(blob)]


def parse_monitors(blob: str | None) -> list[MonitorRecord]:
	return [
		MonitorRecord(
			x=FieldExtractor.int_field(block, 'x', 0),
			y=FieldExtractor.int_field(block, 'y', 0),
			width=FieldExtractor.int_field(block, 'width', 0),
			height=FieldExtractor.int_field(block, 'height', 0),
		)
		for block in iter_blocks(blob)
	]


def union_screen_bounds(monitors: list[MonitorRecord]) -> ScreenBounds:
	"""Combined extent of all monitors, falling back to 1920x1080 per axis when nothing is known."""
	max_x = max((m.x + m.width for m in monitors), default=0)
	max_y = max((m.y + m.height for m in monitors), default=0)
	return ScreenBounds(
		width=max_x if max_x > 0 else DEFAULT_SCREEN_BOUNDS.width,
		height=max_y if max_y > 0 else DEFAULT_SCREEN_BOUNDS.height,
	)
