"""Progression classifier for rank engine.

This module is the entry point used by the presentation layer. It combines:
1. Level classification against an injected RankTable
2. Projection of the matched tier into a read-only RankData value
3. Progress fractions (EXP bar and position within the current rank)
4. Rank-up detection and celebration data

The classifier keeps no mutable state; one instance can be shared freely.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from hunter_rank.services.rank_engine.colors import Color
from hunter_rank.services.rank_engine.errors import InvalidInputError
from hunter_rank.services.rank_engine.rank_table import (
	CelebrationType,
	RankTable,
	RankTier,
	TierDefinition,
)
from hunter_rank.services.rank_engine.table_loader import default_rank_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankData:
	"""Display-ready result of classifying a level."""

	tier: RankTier
	label: str
	main_color: Color
	light_color: Color
	has_glow_effect: bool
	has_pulse_effect: bool
	has_rainbow_effect: bool
	min_level: int
	max_level: Optional[int]
	description: str
	stat_bonus: float
	exp_bonus: float

	@property
	def level_range(self) -> str:
		if self.max_level is None:
			return f"{self.min_level}+"
		return f"{self.min_level}-{self.max_level}"

	@property
	def has_special_effects(self) -> bool:
		return self.has_glow_effect or self.has_pulse_effect or self.has_rainbow_effect

	def is_higher_than(self, other: "RankData") -> bool:
		return self.tier > other.tier

	def __str__(self) -> str:
		return f"{self.tier.value}-Rank ({self.level_range})"


@dataclass(frozen=True)
class ProgressionState:
	"""Caller-owned snapshot of a character's progression."""

	level: int
	current_exp: float
	required_exp: float


@dataclass(frozen=True)
class RankUpCelebration:
	old_rank: RankData
	new_rank: RankData
	message: str
	celebration_type: CelebrationType


class ProgressionClassifier:
	"""Classify levels into rank tiers and derive display attributes.

	Args:
		rank_table: Table to classify against (default: bundled rank_table.json)
	"""

	def __init__(self, rank_table: Optional[RankTable] = None):
		if rank_table is None:
			rank_table = default_rank_table()
		self._rank_table = rank_table

	@property
	def rank_table(self) -> RankTable:
		return self._rank_table

	def get_rank_for_level(self, level: int) -> RankData:
		"""Return the rank data for a level.

		Raises:
			InvalidInputError: If level is below 1
		"""
		return self._to_rank_data(self._rank_table.tier_for(level))

	def compute_progress_fraction(self, state: ProgressionState) -> float:
		"""Fraction of the EXP bar filled, clamped to [0.0, 1.0].

		A current_exp above required_exp reads as a full bar; the level-up
		itself is reconciled upstream.

		Raises:
			InvalidInputError: If required_exp <= 0 or current_exp < 0
		"""
		if not state.required_exp > 0:
			logger.error(f"required_exp must be > 0, got {state.required_exp}")
			raise InvalidInputError(f"required_exp must be > 0, got {state.required_exp}")
		if not state.current_exp >= 0:
			logger.error(f"current_exp must be >= 0, got {state.current_exp}")
			raise InvalidInputError(f"current_exp must be >= 0, got {state.current_exp}")

		return max(0.0, min(1.0, state.current_exp / state.required_exp))

	def next_tier(self, tier: RankTier) -> Optional[RankTier]:
		"""The tier above, or None for the terminal tier."""
		upper = self._rank_table.next_definition(tier)
		return upper.tier if upper else None

	def all_ranks(self) -> Tuple[RankData, ...]:
		return tuple(self._to_rank_data(definition) for definition in self._rank_table)

	def get_rank_by_label(self, label: str) -> Optional[RankData]:
		"""Look up a rank by tier code ("s", "SS"); None if unknown."""
		try:
			tier = RankTier(str(label).strip().upper())
		except ValueError:
			return None
		return self._to_rank_data(self._rank_table.definition_for(tier))

	def get_rank_data(self, tier: Union[RankTier, str]) -> RankData:
		"""Rank data for a tier or tier code.

		Raises:
			InvalidInputError: If the code names no tier
		"""
		if not isinstance(tier, RankTier):
			tier = RankTier.from_label(tier)
		return self._to_rank_data(self._rank_table.definition_for(tier))

	def get_rank_progress(self, level: int) -> float:
		"""Position of level within its tier's level span, in [0.0, 1.0].

		The terminal tier has no upper bound and always reports 1.0.
		"""
		definition = self._rank_table.tier_for(level)
		max_level = self._rank_table.max_level_for(definition.tier)
		if max_level is None:
			return 1.0

		progress_within_rank = level - definition.min_level
		total_levels_in_rank = max_level - definition.min_level + 1
		return max(0.0, min(1.0, progress_within_rank / total_levels_in_rank))

	def get_next_rank(self, level: int) -> Optional[RankData]:
		"""Rank data of the tier above level's tier; None at the top."""
		definition = self._rank_table.tier_for(level)
		upper = self._rank_table.next_definition(definition.tier)
		return self._to_rank_data(upper) if upper else None

	def levels_to_next_rank(self, level: int) -> int:
		"""Levels until the next promotion; 0 once at the terminal tier."""
		next_rank = self.get_next_rank(level)
		if next_rank is None:
			return 0
		return next_rank.min_level - level

	def can_rank_up(self, old_level: int, new_level: int) -> bool:
		"""Whether moving from old_level to new_level promotes to a higher tier."""
		old_tier = self._rank_table.tier_for(old_level).tier
		new_tier = self._rank_table.tier_for(new_level).tier
		return new_tier > old_tier

	def get_rank_up_celebration(self, old_level: int, new_level: int) -> Optional[RankUpCelebration]:
		"""Celebration data for a promotion, or None when the tier doesn't rise."""
		if not self.can_rank_up(old_level, new_level):
			return None

		new_definition = self._rank_table.tier_for(new_level)
		celebration = RankUpCelebration(
			old_rank=self.get_rank_for_level(old_level),
			new_rank=self._to_rank_data(new_definition),
			message=new_definition.rank_up_message or "Congratulations on your rank promotion!",
			celebration_type=new_definition.celebration,
		)
		logger.info(
			f"Rank up: level {old_level} -> {new_level}, "
			f"{celebration.old_rank.tier.value} -> {celebration.new_rank.tier.value}"
		)
		return celebration

	def get_stat_bonus(self, level: int) -> float:
		return self._rank_table.tier_for(level).stat_bonus

	def get_exp_bonus(self, level: int) -> float:
		return self._rank_table.tier_for(level).exp_bonus

	def get_display_color(self, level: int, for_glow: bool = False) -> Color:
		"""Main color, or the light color when a glow is requested and unlocked."""
		definition = self._rank_table.tier_for(level)
		if for_glow and definition.has_glow_effect:
			return definition.light_color
		return definition.main_color

	def has_special_effects(self, level: int) -> bool:
		return self.get_rank_for_level(level).has_special_effects

	def get_rank_achievements(self, tier: Union[RankTier, str]) -> Tuple[str, ...]:
		if not isinstance(tier, RankTier):
			tier = RankTier.from_label(tier)
		return self._rank_table.definition_for(tier).achievements

	def _to_rank_data(self, definition: TierDefinition) -> RankData:
		return RankData(
			tier=definition.tier,
			label=definition.label,
			main_color=definition.main_color,
			light_color=definition.light_color,
			has_glow_effect=definition.has_glow_effect,
			has_pulse_effect=definition.has_pulse_effect,
			has_rainbow_effect=definition.has_rainbow_effect,
			min_level=definition.min_level,
			max_level=self._rank_table.max_level_for(definition.tier),
			description=definition.description,
			stat_bonus=definition.stat_bonus,
			exp_bonus=definition.exp_bonus,
		)
