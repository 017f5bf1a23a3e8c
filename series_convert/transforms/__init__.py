"""
Transforms sub-package for series-convert.

Turns records into target series.

Design: Pipeline Pattern
- pivot.py: rows or named columns -> records (fails on missing cells).
- xaxis.py: x-key predicates and per-record x-value generation.
- targets.py: TargetBuilder, records -> target series + store updates.
"""
