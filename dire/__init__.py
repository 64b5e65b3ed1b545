"""
DIRE - Directive Inline Roll Enricher

A deterministic rule engine that rewrites tabletop-game narrative text
(checks, saves, damage, awards, rule terms) into inline roll directives.

Rules match fixed surface patterns. They never guess.
"""

__version__ = "0.1.0"
