# @file purpose: Tests for tolerant parsing of the compositor geometry feed
"""
Tests for the geometry feed parser.

The feed is only ever read through FieldExtractor, so these cover the
degrade-to-default behaviour on truncated or odd input as much as the happy path.
"""

from wlim.geometry.feed import (
	MAX_STRING_LENGTH,
	FieldExtractor,
	iter_blocks,
	parse_clients,
	parse_monitors,
	union_screen_bounds,
)
from wlim.geometry.views import MonitorRecord, Point, ScreenBounds, Size

CLIENTS = """[{
	"address": "0x5581",
	"at": [100, 200],
	"size": [800, 600],
	"title": "Firefox {private}",
	"pid": 4242
},{
	"at": [ -1920 ,0],
	"size": [1920,1080],
	"title": "term \\"quoted\\" \\\\ done",
	"pid": 77
}]"""


class TestFieldExtractor:
	def test_int_field(self):
		assert FieldExtractor.int_field('{"pid": 42}', 'pid', -1) == 42
		assert FieldExtractor.int_field('{"pid":\t-7}', 'pid', -1) == -7

	def test_int_field_missing_or_unparseable_gives_default(self):
		assert FieldExtractor.int_field('{"other": 1}', 'pid', -1) == -1
		assert FieldExtractor.int_field('{"pid": "abc"}', 'pid', 5) == 5
		assert FieldExtractor.int_field('{"pid": ', 'pid', 9) == 9

	def test_str_field_unescapes(self):
		blob = '{"title": "a \\"b\\" c\\\\d\\/e\\nf\\tg\\qh"}'
		assert FieldExtractor.str_field(blob, 'title') == 'a "b" c\\d/e\nf\tgqh'

	def test_str_field_missing_or_not_a_string(self):
		assert FieldExtractor.str_field('{"pid": 3}', 'title') == ''
		assert FieldExtractor.str_field('{"title": 3}', 'title') == ''

	def test_str_field_truncated(self):
		blob = '{"title": "' + 'x' * 400 + '"}'
		assert len(FieldExtractor.str_field(blob, 'title')) == MAX_STRING_LENGTH
		assert FieldExtractor.str_field(blob, 'title', max_length=3) == 'xxx'

	def test_int_pair_field(self):
		assert FieldExtractor.int_pair_field('{"at": [10, -20]}', 'at') == (10, -20)
		assert FieldExtractor.int_pair_field('{"at":[ 1 , 2 ]}', 'at') == (1, 2)

	def test_int_pair_field_missing(self):
		assert FieldExtractor.int_pair_field('{"size": [1, 2]}', 'at') == (0, 0)

	def test_block_end_ignores_braces_in_strings(self):
		blob = '{"title": "a } b { \\" }", "x": {"y": 1}} tail'
		end = FieldExtractor.block_end(blob, 0)
		assert end == blob.index(' tail') - 1

	def test_block_end_unclosed(self):
		assert FieldExtractor.block_end('{"a": {"b": 1}', 0) is None

	def test_block_at(self):
		assert FieldExtractor.block_at('xx {"a": 1} {"b": 2}') == '{"a": 1}'
		assert FieldExtractor.block_at('no objects here') is None


class TestFeedParsing:
	def test_iter_blocks(self):
		assert list(iter_blocks('[{"a":1},{"b":{"c":2}}]')) == ['{"a":1}', '{"b":{"c":2}}']

	def test_iter_blocks_stops_at_unclosed_block(self):
		assert list(iter_blocks('[{"a":1},{"b":2')) == ['{"a":1}']
		assert list(iter_blocks('')) == []
		assert list(iter_blocks(None)) == []

	def test_parse_clients(self):
		clients = parse_clients(CLIENTS)
		assert len(clients) == 2

		first, second = clients
		assert first.pid == 4242
		assert first.title == 'Firefox {private}'
		assert first.at == Point(100, 200)
		assert first.size == Size(800, 600)

		assert second.pid == 77
		assert second.title == 'term "quoted" \\ done'
		assert second.at == Point(-1920, 0)

	def test_parse_client_defaults(self):
		(client,) = parse_clients('[{"title": "bare"}]')
		assert client.pid == -1
		assert client.at == Point(0, 0)
		assert client.size == Size(0, 0)
		assert not client.geometry.is_usable

	def test_parse_monitors_and_bounds(self):
		monitors = parse_monitors('[{"id": 0, "x": 0, "y": 0, "width": 2560, "height": 1440}, {"x": 2560, "y": 0, "width": 1920, "height": 1080}]')
		assert monitors == [MonitorRecord(0, 0, 2560, 1440), MonitorRecord(2560, 0, 1920, 1080)]
		assert union_screen_bounds(monitors) == ScreenBounds(4480, 1440)

	def test_screen_bounds_default(self):
		assert union_screen_bounds([]) == ScreenBounds(1920, 1080)
		assert union_screen_bounds(parse_monitors('garbage')) == ScreenBounds(1920, 1080)
