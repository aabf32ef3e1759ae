"""
Services Package for Hunter Rank

This package contains the pure domain services consumed by the presentation layer:
- rank_engine: rank tier classification, display attributes and EXP curve
"""
