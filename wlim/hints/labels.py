import string
from collections.abc import Sequence

from wlim.accessibility.views import Target

ALPHABET = string.ascii_lowercase


def label_width(count: int) -> int:
	"""Smallest L with 26**L >= count (1 for anything up to 26)."""
	width, capacity = 1, len(ALPHABET)
	while capacity < count:
		width += 1
		capacity *= len(ALPHABET)
	return width


def encode_label(index: int, width: int) -> str:
	"""Base-26 digits of `index`, most significant first, zero-padded with 'a' to `width`."""
	base = len(ALPHABET)
	digits = ['a'] * width
	for position in range(width - 1, -1, -1):
		digits[position] = ALPHABET[index % base]
		index //= base
	return ''.join(digits)


def generate_labels(count: int) -> list[str]:
	"""Fixed-width labels for `count` targets in collection order."""
	if count <= 0:
		return []
	width = label_width(count)
	return [encode_label(i, width) for i in range(count)]


def assign_labels(targets: Sequence[Target]) -> list[Target]:
	"""Stamp each target with its label; every target gets one exactly once."""
	for target, label in zip(targets, generate_labels(len(targets))):
		target.assign_label(label)
	return list(targets)
