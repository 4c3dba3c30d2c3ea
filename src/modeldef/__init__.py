"""modeldef

Declarative contract tests for ORM model definitions. Describe the columns
and relationships a model should have, and `check_columns` /
`check_relationships` assert that the live model matches: defaults,
validations, foreign keys, and mirrored associations.
"""

from modeldef.bootstrap import check_columns, check_relationships
from modeldef.domain.errors import ContractViolation, InvalidSpecError
from modeldef.domain.specs import (
    DEF_ONLY,
    ColumnSpec,
    InvalidValue,
    RelationKind,
    RelationshipSpec,
)

__all__ = [
    "__version__",
    "DEF_ONLY",
    "ColumnSpec",
    "ContractViolation",
    "InvalidSpecError",
    "InvalidValue",
    "RelationKind",
    "RelationshipSpec",
    "check_columns",
    "check_relationships",
]
__version__ = "0.1.0"
