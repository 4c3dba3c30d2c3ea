"""Interfaces (application boundary) for modeldef.

Defines the narrow introspection port the checkers consume: ABCs for model
classes and instances, and the relationship descriptor DTO.

Dependency rule: may import `modeldef.domain` only. It may be imported by
`modeldef.service_layer` and `modeldef.adapters`.
"""
