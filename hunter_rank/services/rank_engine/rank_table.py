"""Rank table for the rank engine.

This module holds the ordered tier enumeration and the immutable table of
tier definitions. A level is classified by a binary search over the
``min_level`` boundaries, so tier boundaries are plain data and any strictly
increasing boundary set works without code changes.
"""

import logging
from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Iterable, Iterator, Optional, Tuple

from hunter_rank.services.rank_engine.colors import Color
from hunter_rank.services.rank_engine.errors import InvalidInputError, RankTableError

logger = logging.getLogger(__name__)


@total_ordering
class RankTier(Enum):
	"""Hunter rank tiers, declared weakest first.

	Ordering: E < D < C < B < A < S < SS < SSS (SSS is terminal).
	"""

	E = "E"
	D = "D"
	C = "C"
	B = "B"
	A = "A"
	S = "S"
	SS = "SS"
	SSS = "SSS"

	@property
	def index(self) -> int:
		return list(RankTier).index(self)

	def __lt__(self, other):
		if not isinstance(other, RankTier):
			return NotImplemented
		return self.index < other.index

	@classmethod
	def from_label(cls, label: str) -> "RankTier":
		"""Parse a tier code such as "ss" or "SS".

		Raises:
			InvalidInputError: If the label names no tier
		"""
		try:
			return cls(str(label).strip().upper())
		except ValueError:
			logger.error(f"Unknown rank tier label: {label!r}")
			raise InvalidInputError(f"Unknown rank tier: {label!r}") from None


class CelebrationType(Enum):
	"""Intensity of the rank-up celebration shown for a tier."""

	BASIC = "basic"
	ENHANCED = "enhanced"
	ELITE = "elite"
	LEGENDARY = "legendary"
	MYTHICAL = "mythical"
	TRANSCENDENT = "transcendent"


@dataclass(frozen=True)
class TierDefinition:
	"""One row of the rank table."""

	tier: RankTier
	label: str
	min_level: int
	main_color: Color
	light_color: Color
	has_glow_effect: bool = False
	has_pulse_effect: bool = False
	has_rainbow_effect: bool = False
	description: str = ""
	stat_bonus: float = 0.0
	exp_bonus: float = 0.0
	celebration: CelebrationType = CelebrationType.BASIC
	rank_up_message: str = ""
	achievements: Tuple[str, ...] = ()


def validate_level(level: int) -> int:
	"""Check that a level is an integer >= 1.

	Raises:
		InvalidInputError: If level is not an int or is below 1
	"""
	if isinstance(level, bool) or not isinstance(level, int):
		logger.error(f"Level must be an integer, got {level!r}")
		raise InvalidInputError(f"Level must be an integer, got {level!r}")
	if level < 1:
		logger.error(f"Level must be >= 1, got {level}")
		raise InvalidInputError(f"Level must be >= 1, got {level}")
	return level


def _reject(message: str):
	logger.error(message)
	raise RankTableError(message)


def validate_definitions(definitions: Tuple[TierDefinition, ...]) -> bool:
	"""Validate a sequence of tier definitions against the table invariants.

	Args:
		definitions: Rows in tier order

	Returns:
		True if valid, raises RankTableError otherwise

	Raises:
		RankTableError: If any table invariant is broken
	"""
	tiers = [definition.tier for definition in definitions]
	if tiers != list(RankTier):
		_reject(f"Rank table must list every tier exactly once, weakest first, got {[t.value for t in tiers]}")

	if definitions[0].min_level != 1:
		_reject(f"First tier must start at level 1, got {definitions[0].min_level}")

	for definition in definitions:
		tier = definition.tier.value
		if not definition.main_color.is_opaque or not definition.light_color.is_opaque:
			_reject(f"Tier {tier} colors must be fully opaque")
		if definition.has_glow_effect and definition.main_color == definition.light_color:
			_reject(f"Tier {tier} glows but main and light colors match")
		if definition.has_rainbow_effect and not definition.has_pulse_effect:
			_reject(f"Tier {tier} has rainbow effect without pulse")
		if definition.has_pulse_effect and not definition.has_glow_effect:
			_reject(f"Tier {tier} has pulse effect without glow")
		for bonus in ("stat_bonus", "exp_bonus"):
			if not getattr(definition, bonus) >= 0:
				_reject(f"Tier {tier} {bonus} must be >= 0, got {getattr(definition, bonus)}")

	for lower, upper in zip(definitions, definitions[1:]):
		if upper.min_level <= lower.min_level:
			_reject(
				f"min_level must increase: {lower.tier.value}={lower.min_level}, "
				f"{upper.tier.value}={upper.min_level}"
			)
		for flag in ("has_glow_effect", "has_pulse_effect", "has_rainbow_effect"):
			if getattr(lower, flag) and not getattr(upper, flag):
				_reject(f"{flag} is locked again at tier {upper.tier.value}")
		for bonus in ("stat_bonus", "exp_bonus"):
			if getattr(upper, bonus) < getattr(lower, bonus):
				_reject(f"{bonus} decreases at tier {upper.tier.value}")

	logger.debug("Rank table validation passed")
	return True


class RankTable:
	"""Immutable, ordered table of tier definitions."""

	__slots__ = ("_definitions", "_boundaries", "_by_tier")

	def __init__(self, definitions: Iterable[TierDefinition]):
		rows = tuple(definitions)
		validate_definitions(rows)
		object.__setattr__(self, "_definitions", rows)
		object.__setattr__(self, "_boundaries", tuple(row.min_level for row in rows))
		object.__setattr__(self, "_by_tier", {row.tier: row for row in rows})

	def __setattr__(self, name, value):
		raise AttributeError("RankTable is immutable")

	def __iter__(self) -> Iterator[TierDefinition]:
		return iter(self._definitions)

	def __len__(self) -> int:
		return len(self._definitions)

	def __eq__(self, other):
		if not isinstance(other, RankTable):
			return NotImplemented
		return self._definitions == other._definitions

	def __hash__(self):
		return hash(self._definitions)

	def __repr__(self) -> str:
		bounds = ", ".join(f"{row.tier.value}>={row.min_level}" for row in self._definitions)
		return f"RankTable({bounds})"

	@property
	def definitions(self) -> Tuple[TierDefinition, ...]:
		return self._definitions

	@property
	def tiers(self) -> Tuple[RankTier, ...]:
		return tuple(row.tier for row in self._definitions)

	def tier_for(self, level: int) -> TierDefinition:
		"""Return the definition whose [min_level, next min_level) interval holds level.

		The last tier has no upper bound.

		Raises:
			InvalidInputError: If level is below 1 or not an integer
		"""
		validate_level(level)
		index = bisect_right(self._boundaries, level) - 1
		definition = self._definitions[index]
		logger.debug(f"Level {level} classified as tier={definition.tier.value}")
		return definition

	def definition_for(self, tier: RankTier) -> TierDefinition:
		return self._by_tier[tier]

	def next_definition(self, tier: RankTier) -> Optional[TierDefinition]:
		"""Definition of the tier above, or None at the terminal tier."""
		index = tier.index + 1
		if index >= len(self._definitions):
			return None
		return self._definitions[index]

	def max_level_for(self, tier: RankTier) -> Optional[int]:
		"""Inclusive upper level of a tier, None when unbounded."""
		upper = self.next_definition(tier)
		if upper is None:
			return None
		return upper.min_level - 1
