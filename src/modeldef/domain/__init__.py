"""Domain layer for modeldef.

Contains the declarative spec value objects, the violation errors, and the
pure helpers (inflection, blank checks) the checkers rely on. This package is
deliberately ORM-agnostic.

Dependency rule: do not import from `modeldef.adapters` or `modeldef.entrypoints`.
"""
