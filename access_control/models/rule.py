"""
Access Control Rule Models

A rule is the unit assigned to a person: it names the groups (and therefore
the devices and time windows) the person may use.

    AccessControlRule (parent)
        └── AccessControlRuleGroup (N) → references AccessControlGroup
"""

import uuid

from sqlalchemy import Column, Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from access_control.models.base import (
    Base,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class AccessControlRule(Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin):
    """Named set of access control groups."""

    __tablename__ = "access_control_rules"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        Index(
            "uq_access_control_rules_name",
            "name",
            unique=True,
            postgresql_where=(Column("deleted_at").is_(None)),
            sqlite_where=(Column("deleted_at").is_(None)),
        ),
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<AccessControlRule(id={self.id}, name={self.name})>"


class AccessControlRuleGroup(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Link from a rule to one of its groups."""

    __tablename__ = "access_control_rule_groups"

    access_control_rule_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True,
        doc="Owning rule",
    )
    access_control_group_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        doc="Referenced group (may dangle if the group is later deleted)",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<AccessControlRuleGroup(rule={self.access_control_rule_id}, "
            f"group={self.access_control_group_id})>"
        )
