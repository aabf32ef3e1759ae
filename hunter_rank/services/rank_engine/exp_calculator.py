"""
EXP Calculator - Experience curve and level-up mechanics.

This module provides functions to calculate the EXP threshold for each level,
EXP earned from activities, and multi-level level-ups when EXP is added.
"""

import logging
from dataclasses import dataclass

from hunter_rank.services.rank_engine.classifier import ProgressionState
from hunter_rank.services.rank_engine.errors import InvalidInputError
from hunter_rank.services.rank_engine.rank_table import validate_level

logger = logging.getLogger(__name__)


BASE_EXP_THRESHOLD = 1000.0
EXP_GROWTH_RATE = 1.2
MAX_LEVELS_PER_CHECK = 100
QUIT_BAD_HABIT_EXP = 60.0


@dataclass(frozen=True)
class LevelUpResult:
	can_level_up: bool
	new_level: int
	excess_exp: float
	levels_gained: int


def calculate_exp_threshold(level: int) -> float:
	"""EXP needed to clear a level: 1000 * 1.2^(level - 1).

	Levels past float range get an infinite threshold.

	Raises:
		InvalidInputError: If level is below 1
	"""
	validate_level(level)
	try:
		return BASE_EXP_THRESHOLD * EXP_GROWTH_RATE ** (level - 1)
	except OverflowError:
		logger.debug(f"EXP threshold overflow at level={level}")
		return float("inf")


def calculate_exp_gain(activity_type: str, duration_minutes: int) -> float:
	"""Calculate EXP earned from an activity.

	Args:
		activity_type: Activity identifier
		duration_minutes: Minutes spent on the activity

	Returns:
		1 EXP per minute; "quit_bad_habit" grants a fixed 60 regardless of duration

	Raises:
		InvalidInputError: If duration is negative
	"""
	if not duration_minutes >= 0:
		logger.error(f"Duration must be non-negative, got {duration_minutes}")
		raise InvalidInputError(f"Duration must be non-negative, got {duration_minutes}")

	if activity_type == "quit_bad_habit":
		return QUIT_BAD_HABIT_EXP

	return float(duration_minutes)


def _validate_exp(current_exp: float) -> None:
	if not current_exp >= 0:
		logger.error(f"current_exp must be >= 0, got {current_exp}")
		raise InvalidInputError(f"current_exp must be >= 0, got {current_exp}")


def check_level_up(level: int, current_exp: float) -> LevelUpResult:
	"""Work out how many levels current_exp buys, starting from level.

	Each cleared level consumes its own threshold; at most
	MAX_LEVELS_PER_CHECK levels are granted per call.

	Raises:
		InvalidInputError: If level < 1 or current_exp < 0
	"""
	_validate_exp(current_exp)

	if current_exp < calculate_exp_threshold(level):
		return LevelUpResult(can_level_up=False, new_level=level, excess_exp=0.0, levels_gained=0)

	new_level = level
	remaining_exp = current_exp
	levels_gained = 0

	while levels_gained < MAX_LEVELS_PER_CHECK and remaining_exp >= calculate_exp_threshold(new_level):
		remaining_exp -= calculate_exp_threshold(new_level)
		new_level += 1
		levels_gained += 1

	logger.info(f"Level up: {level} -> {new_level} (+{levels_gained}), excess_exp={remaining_exp}")
	return LevelUpResult(
		can_level_up=True,
		new_level=new_level,
		excess_exp=remaining_exp,
		levels_gained=levels_gained,
	)


def add_exp(level: int, current_exp: float, exp_to_add: float) -> LevelUpResult:
	"""Add EXP and apply any resulting level-ups.

	When no level is gained, excess_exp carries the new EXP total.

	Raises:
		InvalidInputError: If exp_to_add is negative
	"""
	_validate_exp(current_exp)
	if not exp_to_add >= 0:
		logger.error(f"EXP to add must be non-negative, got {exp_to_add}")
		raise InvalidInputError(f"EXP to add must be non-negative, got {exp_to_add}")

	total_exp = current_exp + exp_to_add
	result = check_level_up(level, total_exp)
	if not result.can_level_up:
		return LevelUpResult(can_level_up=False, new_level=level, excess_exp=total_exp, levels_gained=0)
	return result


def build_progression_state(level: int, current_exp: float) -> ProgressionState:
	"""ProgressionState whose required_exp comes from the EXP curve."""
	_validate_exp(current_exp)
	return ProgressionState(
		level=level,
		current_exp=current_exp,
		required_exp=calculate_exp_threshold(level),
	)


def exp_needed_for_next_level(level: int, current_exp: float) -> float:
	"""EXP still missing for the next level, clamped to [0, threshold]."""
	_validate_exp(current_exp)
	threshold = calculate_exp_threshold(level)
	return max(0.0, min(threshold, threshold - current_exp))
