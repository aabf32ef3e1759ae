"""
Rank Engine Service Module

This module classifies hunter levels into rank tiers and derives their
display attributes.

Services:
    - rank_table: Ordered tier enumeration and immutable boundary table
    - table_loader: LRU-cached rank table JSON loading and validation
    - classifier: Rank lookup, progress fractions and rank-up detection
    - exp_calculator: EXP curve and level-up mechanics
    - colors: Opaque RGBA color value
"""

from hunter_rank.services.rank_engine.errors import (
    InvalidInputError,
    RankTableError,
)
from hunter_rank.services.rank_engine.colors import Color
from hunter_rank.services.rank_engine.rank_table import (
    CelebrationType,
    RankTable,
    RankTier,
    TierDefinition,
    validate_definitions,
    validate_level,
)
from hunter_rank.services.rank_engine.table_loader import (
    build_rank_table,
    clear_cache,
    default_rank_table,
    load_rank_table,
    load_rank_table_config,
    validate_rank_table_config,
)
from hunter_rank.services.rank_engine.classifier import (
    ProgressionClassifier,
    ProgressionState,
    RankData,
    RankUpCelebration,
)
from hunter_rank.services.rank_engine.exp_calculator import (
    LevelUpResult,
    add_exp,
    build_progression_state,
    calculate_exp_gain,
    calculate_exp_threshold,
    check_level_up,
    exp_needed_for_next_level,
)

__all__ = [
    "InvalidInputError",
    "RankTableError",
    "Color",
    "CelebrationType",
    "RankTable",
    "RankTier",
    "TierDefinition",
    "validate_definitions",
    "validate_level",
    "build_rank_table",
    "clear_cache",
    "default_rank_table",
    "load_rank_table",
    "load_rank_table_config",
    "validate_rank_table_config",
    "ProgressionClassifier",
    "ProgressionState",
    "RankData",
    "RankUpCelebration",
    "LevelUpResult",
    "add_exp",
    "build_progression_state",
    "calculate_exp_gain",
    "calculate_exp_threshold",
    "check_level_up",
    "exp_needed_for_next_level",
]
