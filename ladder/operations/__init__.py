"""
Operations Layer

This package provides the pure computations of the ladder engine. Each
module takes plain records (players, matches, per-player results) and returns
new computed values; none of them persist anything.

Architecture:
- Data models: immutable records shared by every layer
- Operations layer: rating-independent rules and reorderings
- Services layer: caching and composition for ladder views

Each operations module focuses on a specific concern:
- tiers: rank tier classification
- momentum: hot/cold state over a trailing window
- positions: challenge ladder reordering
- recommender: next opponent and teammate suggestions
- scorecard: graded performance reports
- player_stats / standings / rating_history: supporting aggregation
"""
