"""Table loader for rank engine.

This module handles loading, validating and caching of the rank table JSON
config. The bundled ``rank_table.json`` holds the canonical tier boundaries;
callers may point at another file to substitute a table.
"""

import json
import logging
import os
from functools import lru_cache
from typing import Dict, Any, Optional

from hunter_rank.services.rank_engine.colors import Color
from hunter_rank.services.rank_engine.errors import RankTableError
from hunter_rank.services.rank_engine.rank_table import (
	CelebrationType,
	RankTable,
	RankTier,
	TierDefinition,
)

logger = logging.getLogger(__name__)


DEFAULT_CACHE_SIZE = 8

DEFAULT_TABLE_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "rank_table.json")

EFFECT_FLAGS = {
	"glow": "has_glow_effect",
	"pulse": "has_pulse_effect",
	"rainbow": "has_rainbow_effect",
}


def get_table_path(path: Optional[str] = None) -> str:
	"""Resolve the rank table JSON path.

	Args:
		path: Explicit path, or None for the bundled table

	Returns:
		Absolute path to the JSON file

	Raises:
		FileNotFoundError: If the JSON file doesn't exist
	"""
	json_path = os.path.abspath(path) if path else DEFAULT_TABLE_PATH

	if not os.path.exists(json_path):
		logger.error(f"Rank table JSON not found: {json_path}")
		raise FileNotFoundError(f"Rank table JSON not found: {json_path}")

	return json_path


def load_rank_table_config(path: Optional[str] = None) -> Dict[str, Any]:
	"""Load rank table JSON from file with LRU caching.

	Args:
		path: Explicit path, or None for the bundled table

	Returns:
		Dictionary containing the rank table config

	Raises:
		FileNotFoundError: If JSON file doesn't exist
		json.JSONDecodeError: If JSON file is malformed
	"""
	return _load_config_file(get_table_path(path))


@lru_cache(maxsize=DEFAULT_CACHE_SIZE)
def _load_config_file(json_path: str) -> Dict[str, Any]:
	logger.debug(f"Loading rank table config from {json_path}")

	with open(json_path, 'r', encoding='utf-8') as f:
		config = json.load(f)

	logger.debug(f"Loaded rank table config with {len(config.get('tiers', []))} tiers")
	return config


def _reject(message: str):
	logger.error(message)
	raise RankTableError(message)


def validate_rank_table_config(config: Dict[str, Any]) -> bool:
	"""Validate that a rank table config has the required fields and types.

	Table invariants (ordering, effect nesting, bonus growth) are checked
	when the RankTable is built.

	Args:
		config: The rank table config dictionary

	Returns:
		True if valid, raises RankTableError otherwise

	Raises:
		RankTableError: If config is missing required fields or has wrong types
	"""
	if not isinstance(config, dict) or "tiers" not in config:
		_reject("Rank table config missing required field: tiers")

	if not isinstance(config["tiers"], list):
		_reject("Rank table tiers must be a list")

	required_fields = ["tier", "label", "min_level", "main_color", "light_color"]

	for position, row in enumerate(config["tiers"]):
		if not isinstance(row, dict):
			_reject(f"Tier entry {position} must be an object")

		for field in required_fields:
			if field not in row:
				_reject(f"Tier entry {position} missing required field: {field}")

		min_level = row["min_level"]
		if isinstance(min_level, bool) or not isinstance(min_level, int) or min_level < 1:
			_reject(f"Tier entry {position} min_level must be an integer >= 1")

		for field in ("label", "description", "rank_up_message"):
			if not isinstance(row.get(field, ""), str):
				_reject(f"Tier entry {position} {field} must be a string")

		for field in ("effects", "achievements"):
			values = row.get(field, [])
			if not isinstance(values, list) or not all(isinstance(value, str) for value in values):
				_reject(f"Tier entry {position} {field} must be a list of strings")

		unknown = set(row.get("effects", [])) - set(EFFECT_FLAGS)
		if unknown:
			_reject(f"Tier entry {position} has unknown effects: {sorted(unknown)}")

		for field in ("stat_bonus", "exp_bonus"):
			value = row.get(field, 0.0)
			if isinstance(value, bool) or not isinstance(value, (int, float)):
				_reject(f"Tier entry {position} {field} must be a number")

	logger.debug("Rank table config validation passed")
	return True


def _definition_from_row(row: Dict[str, Any]) -> TierDefinition:
	effects = set(row.get("effects", []))
	try:
		tier = RankTier(str(row["tier"]).upper())
		celebration = CelebrationType(row.get("celebration", CelebrationType.BASIC.value))
	except ValueError as e:
		logger.error(f"Invalid tier entry {row.get('tier')!r}: {e}")
		raise RankTableError(f"Invalid tier entry {row.get('tier')!r}: {e}") from e

	return TierDefinition(
		tier=tier,
		label=row["label"],
		min_level=row["min_level"],
		main_color=Color.coerce(row["main_color"]),
		light_color=Color.coerce(row["light_color"]),
		description=row.get("description", ""),
		stat_bonus=float(row.get("stat_bonus", 0.0)),
		exp_bonus=float(row.get("exp_bonus", 0.0)),
		celebration=celebration,
		rank_up_message=row.get("rank_up_message", ""),
		achievements=tuple(row.get("achievements", [])),
		**{flag: name in effects for name, flag in EFFECT_FLAGS.items()},
	)


def build_rank_table(config: Dict[str, Any]) -> RankTable:
	"""Build an immutable RankTable from a config dictionary.

	Raises:
		RankTableError: If the config or the resulting table is invalid
	"""
	validate_rank_table_config(config)
	return RankTable(_definition_from_row(row) for row in config["tiers"])


@lru_cache(maxsize=DEFAULT_CACHE_SIZE)
def _load_rank_table(json_path: str) -> RankTable:
	table = build_rank_table(_load_config_file(json_path))
	logger.info(f"Rank table loaded from {json_path}: {table!r}")
	return table


def load_rank_table(path: Optional[str] = None) -> RankTable:
	"""Load and build a RankTable from a JSON file, cached per path."""
	return _load_rank_table(get_table_path(path))


def default_rank_table() -> RankTable:
	"""The canonical table built from the bundled rank_table.json."""
	return load_rank_table()


def clear_cache():
	"""Clear the LRU caches for rank table configs and built tables.

	Useful when a rank table file is updated and needs to be reloaded.
	"""
	_load_config_file.cache_clear()
	_load_rank_table.cache_clear()
