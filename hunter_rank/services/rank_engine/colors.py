"""Opaque RGBA color value used for rank display attributes.

The engine hands colors to the presentation layer as plain values; it never
touches a UI toolkit.
"""

import logging
import re
from dataclasses import dataclass
from typing import Union

from hunter_rank.services.rank_engine.errors import RankTableError

logger = logging.getLogger(__name__)

HEX_COLOR_PATTERN = re.compile(r"#?([0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})")


def _reject(message: str):
	logger.error(message)
	raise RankTableError(message)


@dataclass(frozen=True)
class Color:
	"""An RGBA color with 8-bit channels."""

	red: int
	green: int
	blue: int
	alpha: int = 255

	def __post_init__(self):
		for channel in (self.red, self.green, self.blue, self.alpha):
			if isinstance(channel, bool) or not isinstance(channel, int) or not 0 <= channel <= 255:
				_reject(f"Color channel out of range: {channel!r}")

	@classmethod
	def from_argb(cls, value: int) -> "Color":
		"""Build a color from a 0xAARRGGBB integer."""
		if not 0 <= value <= 0xFFFFFFFF:
			_reject(f"ARGB value out of range: {value!r}")
		return cls(
			red=(value >> 16) & 0xFF,
			green=(value >> 8) & 0xFF,
			blue=value & 0xFF,
			alpha=(value >> 24) & 0xFF,
		)

	@classmethod
	def from_hex(cls, text: str) -> "Color":
		"""Parse "#RRGGBB" (opaque) or "#AARRGGBB"."""
		match = HEX_COLOR_PATTERN.fullmatch(text.strip())
		if match is None:
			_reject(f"Invalid color literal: {text!r}")
		digits = match.group(1)
		if len(digits) == 6:
			digits = "FF" + digits
		return cls.from_argb(int(digits, 16))

	@classmethod
	def coerce(cls, value: Union["Color", int, str]) -> "Color":
		if isinstance(value, Color):
			return value
		if isinstance(value, str):
			return cls.from_hex(value)
		if isinstance(value, int) and not isinstance(value, bool):
			return cls.from_argb(value)
		_reject(f"Unsupported color value: {value!r}")

	@property
	def is_opaque(self) -> bool:
		return self.alpha == 255

	def to_argb(self) -> int:
		return (self.alpha << 24) | (self.red << 16) | (self.green << 8) | self.blue

	def to_hex(self) -> str:
		return f"#{self.to_argb():08X}"

	def __str__(self) -> str:
		return self.to_hex()
