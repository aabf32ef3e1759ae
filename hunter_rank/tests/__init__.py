"""
Hunter Rank Test Suite

This package contains unit tests for the hunter rank progression engine.

Test Modules:
- unit/rank_engine/test_colors: RGBA color parsing and opacity
- unit/rank_engine/test_rank_table: Tier ordering, boundary lookup and table invariants
- unit/rank_engine/test_table_loader: Rank table JSON loading, validation and caching
- unit/rank_engine/test_classifier: Rank classification, progress fractions and rank-ups
- unit/rank_engine/test_exp_calculator: EXP curve and level-up mechanics
"""
