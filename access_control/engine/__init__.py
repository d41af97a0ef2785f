"""
Consistency Engine

Building blocks the entity services combine for every parent write:

    parse_identifiers / ReferenceResolver  → request ids to live references
    UniquenessValidator                    → duplicate checks among live rows
    expand_*_defaults                      → omitted child sets filled in
    AssociationReplacer                    → child set replaced in a transaction
    CascadeDeleter                         → parent + children removed together
    ResponseAssembler                      → references resolved for read views
"""

from access_control.engine.assembler import ResponseAssembler
from access_control.engine.cascade import CascadeDeleter
from access_control.engine.defaults import (
    default_access_schedules,
    default_attendance_schedules,
    expand_attendance_defaults,
    expand_group_defaults,
    expand_person_defaults,
    expand_rule_defaults,
)
from access_control.engine.references import (
    ReferenceResolver,
    parse_identifier,
    parse_identifiers,
)
from access_control.engine.replacer import AssociationReplacer
from access_control.engine.uniqueness import UniquenessValidator

__all__ = [
    "AssociationReplacer",
    "CascadeDeleter",
    "ReferenceResolver",
    "ResponseAssembler",
    "UniquenessValidator",
    "default_access_schedules",
    "default_attendance_schedules",
    "expand_attendance_defaults",
    "expand_group_defaults",
    "expand_person_defaults",
    "expand_rule_defaults",
    "parse_identifier",
    "parse_identifiers",
]
