"""Shared fixtures for rank engine tests."""

import pytest

from hunter_rank.services.rank_engine.colors import Color
from hunter_rank.services.rank_engine.rank_table import RankTable, RankTier, TierDefinition
from hunter_rank.services.rank_engine.table_loader import clear_cache


def make_table(boundaries, glow_from=RankTier.S, pulse_from=RankTier.SS, rainbow_from=RankTier.SSS):
	"""Build a RankTable with the given min_level per tier, weakest first."""
	definitions = []
	for index, (tier, min_level) in enumerate(zip(RankTier, boundaries)):
		definitions.append(TierDefinition(
			tier=tier,
			label=f"{tier.value}-Rank Hunter",
			min_level=min_level,
			main_color=Color.from_argb(0xFF000000 + index),
			light_color=Color.from_argb(0xFFFFFF00 + index),
			has_glow_effect=tier >= glow_from,
			has_pulse_effect=tier >= pulse_from,
			has_rainbow_effect=tier >= rainbow_from,
			stat_bonus=index * 0.01,
			exp_bonus=index * 0.02,
		))
	return RankTable(definitions)


@pytest.fixture(autouse=True)
def reset_table_cache():
	clear_cache()
	yield
	clear_cache()


@pytest.fixture
def reference_boundaries():
	return [1, 10, 20, 35, 55, 80, 100, 150]


@pytest.fixture
def compact_table():
	"""Alternate table with narrow tiers."""
	return make_table([1, 2, 3, 5, 8, 13, 21, 34])


@pytest.fixture
def wide_table():
	"""Alternate table with wide, uneven tiers."""
	return make_table([1, 100, 250, 1000, 5000, 10000, 50000, 100000], glow_from=RankTier.A)


@pytest.fixture
def table_factory():
	return make_table
