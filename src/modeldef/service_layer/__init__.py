"""Service layer for modeldef.

Implements the two contract checks: columns and relationships. Both operate
on the introspection port only.

Dependency rule: may import `modeldef.domain` and `modeldef.interfaces`, but not
`modeldef.adapters` or `modeldef.entrypoints`.
"""
