from typing import Any


class WlimError(Exception):
	"""Base class for all wlim errors"""

	message: str
	details: dict[str, Any] | None = None

	def __init__(self, message: str, details: dict[str, Any] | None = None):
		self.message = message
		super().__init__(message)
		self.details = details

	def __str__(self) -> str:
		if self.details:
			return f'{self.message} ({self.details})'
		return self.message


class NoTargetsFoundError(WlimError):
	"""Discovery finished with nothing clickable to label"""


class CompositorUnavailableError(WlimError):
	"""The compositor's IPC socket could not be located or reached"""
