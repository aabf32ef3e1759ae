"""Unit tests for rank_table.py"""

import dataclasses

import pytest

from hunter_rank.services.rank_engine.colors import Color
from hunter_rank.services.rank_engine.errors import InvalidInputError, RankTableError
from hunter_rank.services.rank_engine.rank_table import RankTable, RankTier


def test_tier_order():
	tiers = list(RankTier)

	assert [t.value for t in tiers] == ["E", "D", "C", "B", "A", "S", "SS", "SSS"]
	for lower, upper in zip(tiers, tiers[1:]):
		assert lower < upper
		assert upper > lower
		assert lower <= upper
	assert RankTier.SSS >= RankTier.SSS
	assert max(tiers) is RankTier.SSS


def test_tier_from_label_is_case_insensitive():
	assert RankTier.from_label("ss") is RankTier.SS
	assert RankTier.from_label(" SSS ") is RankTier.SSS


def test_tier_from_label_unknown():
	with pytest.raises(InvalidInputError):
		RankTier.from_label("Z")


def test_tier_for_reference_boundaries(table_factory, reference_boundaries):
	table = table_factory(reference_boundaries)

	assert table.tier_for(1).tier is RankTier.E
	assert table.tier_for(9).tier is RankTier.E
	assert table.tier_for(10).tier is RankTier.D
	assert table.tier_for(34).tier is RankTier.C
	assert table.tier_for(35).tier is RankTier.B
	assert table.tier_for(149).tier is RankTier.SS
	assert table.tier_for(150).tier is RankTier.SSS
	assert table.tier_for(10 ** 9).tier is RankTier.SSS


@pytest.mark.parametrize("level", [0, -1, -100])
def test_tier_for_rejects_levels_below_one(compact_table, level):
	with pytest.raises(InvalidInputError):
		compact_table.tier_for(level)


@pytest.mark.parametrize("level", [1.5, "5", None, True])
def test_tier_for_rejects_non_integer_levels(compact_table, level):
	with pytest.raises(InvalidInputError):
		compact_table.tier_for(level)


@pytest.mark.parametrize("table_name", ["compact_table", "wide_table"])
def test_alternate_tables_are_total_and_monotonic(request, table_name):
	table = request.getfixturevalue(table_name)
	top = table.definitions[-1].min_level + 50

	previous = None
	for level in range(1, top):
		definition = table.tier_for(level)
		max_level = table.max_level_for(definition.tier)

		assert definition.min_level <= level
		assert max_level is None or level <= max_level
		if previous is not None:
			assert previous <= definition.tier
		previous = definition.tier


def test_max_level_for(compact_table):
	assert compact_table.max_level_for(RankTier.E) == 1
	assert compact_table.max_level_for(RankTier.B) == 7
	assert compact_table.max_level_for(RankTier.SSS) is None


def test_next_definition(compact_table):
	assert compact_table.next_definition(RankTier.E).tier is RankTier.D
	assert compact_table.next_definition(RankTier.SSS) is None


def test_table_is_immutable(compact_table):
	with pytest.raises(AttributeError):
		compact_table._definitions = ()

	with pytest.raises(dataclasses.FrozenInstanceError):
		compact_table.definitions[0].min_level = 5


def test_tables_with_same_rows_are_equal(table_factory):
	assert table_factory([1, 2, 3, 4, 5, 6, 7, 8]) == table_factory([1, 2, 3, 4, 5, 6, 7, 8])
	assert table_factory([1, 2, 3, 4, 5, 6, 7, 8]) != table_factory([1, 2, 3, 4, 5, 6, 7, 9])


def test_table_len_and_iteration(compact_table):
	assert len(compact_table) == 8
	assert [d.tier for d in compact_table] == list(RankTier)
	assert compact_table.tiers == tuple(RankTier)


def test_rejects_non_increasing_boundaries(table_factory):
	with pytest.raises(RankTableError):
		table_factory([1, 10, 10, 35, 55, 80, 100, 150])


def test_rejects_table_not_starting_at_level_one(table_factory):
	with pytest.raises(RankTableError):
		table_factory([2, 10, 20, 35, 55, 80, 100, 150])


def test_rejects_missing_tier(compact_table):
	with pytest.raises(RankTableError):
		RankTable(compact_table.definitions[:-1])


def test_rejects_out_of_order_tiers(compact_table):
	rows = list(compact_table.definitions)
	rows[0], rows[1] = rows[1], rows[0]

	with pytest.raises(RankTableError):
		RankTable(rows)


def test_rejects_relocked_effect(compact_table):
	rows = list(compact_table.definitions)
	rows[-1] = dataclasses.replace(rows[-1], has_glow_effect=False, has_pulse_effect=False, has_rainbow_effect=False)

	with pytest.raises(RankTableError):
		RankTable(rows)


def test_rejects_pulse_without_glow(table_factory):
	with pytest.raises(RankTableError):
		table_factory([1, 2, 3, 4, 5, 6, 7, 8], glow_from=RankTier.SSS, pulse_from=RankTier.SS)


def test_rejects_glow_with_identical_colors(compact_table):
	rows = list(compact_table.definitions)
	rows[5] = dataclasses.replace(rows[5], light_color=rows[5].main_color)

	with pytest.raises(RankTableError):
		RankTable(rows)


def test_rejects_translucent_colors(compact_table):
	rows = list(compact_table.definitions)
	rows[0] = dataclasses.replace(rows[0], main_color=Color(10, 10, 10, alpha=128))

	with pytest.raises(RankTableError):
		RankTable(rows)


@pytest.mark.parametrize("bonus", ["stat_bonus", "exp_bonus"])
def test_rejects_decreasing_bonus(compact_table, bonus):
	rows = list(compact_table.definitions)
	rows[-1] = dataclasses.replace(rows[-1], **{bonus: getattr(rows[-2], bonus) / 2})

	with pytest.raises(RankTableError):
		RankTable(rows)


@pytest.mark.parametrize("value", [-0.1, float("nan")])
def test_rejects_negative_or_nan_bonus(compact_table, value):
	rows = list(compact_table.definitions)
	rows[0] = dataclasses.replace(rows[0], stat_bonus=value)

	with pytest.raises(RankTableError):
		RankTable(rows)


def test_rejection_is_logged(table_factory, caplog):
	with caplog.at_level("ERROR", logger="hunter_rank.services.rank_engine.rank_table"):
		with pytest.raises(RankTableError) as excinfo:
			table_factory([1, 10, 10, 35, 55, 80, 100, 150])

	assert str(excinfo.value) in caplog.text
