"""
Parsers sub-package for series-convert.

Converts raw source text/objects into records (a list of
``field name -> cell`` mappings), the shape every later stage consumes.

Design: Strategy Pattern
- base.py defines the DelimitedParser ABC (``rows()`` + ``parse()``).
- delimited.py implements the comma and tab strategies and the
  header-only fast path shared by both.
- json_path.py resolves key paths inside nested JSON and converts JSON
  payloads to records via the pivot transforms.
"""
