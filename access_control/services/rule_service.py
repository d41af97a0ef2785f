"""
Access Control Rule Service

Business logic for rules. A rule bundles groups:

    AccessControlRule
        └── AccessControlRuleGroup (group links)

Rules have no default content: omitting group_ids stores a rule without
groups.
"""

from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.config.constants import RESOURCE_GROUP, RESOURCE_RULE
from access_control.core.exceptions import NotFoundError
from access_control.core.logging import logger
from access_control.db.repositories import RuleRepository
from access_control.db.transaction import Transaction
from access_control.engine import (
    AssociationReplacer,
    CascadeDeleter,
    ReferenceResolver,
    ResponseAssembler,
    UniquenessValidator,
    expand_rule_defaults,
    parse_identifiers,
)
from access_control.models.group import AccessControlGroup
from access_control.models.rule import AccessControlRule, AccessControlRuleGroup
from access_control.schemas.common import NamedReference
from access_control.schemas.rule import RuleCreate, RulePatch, RuleResponse, RuleUpdate

RULE_GROUPS = AssociationReplacer(
    AccessControlRuleGroup,
    "access_control_rule_id",
    reference=ReferenceResolver(
        AccessControlGroup,
        RESOURCE_GROUP,
        key="access_control_group_id",
        field="group_ids",
    ),
)


def _group_rows(group_ids: list[UUID]) -> list[dict]:
    return [{"access_control_group_id": group_id} for group_id in group_ids]


class RuleService:
    """Service for access control rule operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = RuleRepository(session)
        self.names = UniquenessValidator(
            session, AccessControlRule, "name", resource=RESOURCE_RULE
        )
        self.assembler = ResponseAssembler(session)
        self.deleter = CascadeDeleter(AccessControlRule, RESOURCE_RULE, (RULE_GROUPS,))

    async def create_rule(self, data: RuleCreate) -> RuleResponse:
        """Create a rule linked to the given groups.

        Raises:
            ValidationError: Malformed group id
            DuplicateError: Name already used by a live rule
            NotFoundError: A group does not exist
        """
        data = expand_rule_defaults(data)
        group_ids = parse_identifiers(data.group_ids, "group_ids")

        async with Transaction(self.session) as tx:
            await self.names.ensure_unique(data.name)
            rule = await tx.repository(RuleRepository).create(name=data.name)
            await RULE_GROUPS.replace(tx, rule.id, _group_rows(group_ids))

        logger.info("Rule created", rule_id=str(rule.id), name=rule.name)
        return await self._to_response(rule)

    async def get_rule(self, rule_id: UUID) -> RuleResponse:
        rule = await self.repo.get_live(rule_id)
        if not rule:
            raise NotFoundError(resource=RESOURCE_RULE, resource_id=str(rule_id))
        return await self._to_response(rule)

    async def list_rules(
        self,
        offset: int = 0,
        limit: int = 100,
        name: Optional[str] = None,
    ) -> Tuple[list[RuleResponse], int]:
        """List live rules.

        Returns:
            Tuple of (rules, total_count)
        """
        contains = {"name": name}
        rules = await self.repo.search(offset=offset, limit=limit, contains=contains)
        total = await self.repo.count_search(contains=contains)
        return [await self._to_response(r) for r in rules], total

    async def update_rule(self, rule_id: UUID, data: RuleUpdate) -> RuleResponse:
        """Replace a rule's name and its full set of groups."""
        data = expand_rule_defaults(data)
        group_ids = parse_identifiers(data.group_ids, "group_ids")

        async with Transaction(self.session) as tx:
            rules = tx.repository(RuleRepository)
            if not await rules.get_live(rule_id):
                raise NotFoundError(resource=RESOURCE_RULE, resource_id=str(rule_id))

            await self.names.ensure_unique(data.name, exclude_id=rule_id)
            rule = await rules.overwrite(rule_id, name=data.name)
            await RULE_GROUPS.replace(tx, rule_id, _group_rows(group_ids))

        logger.info("Rule updated", rule_id=str(rule_id), group_count=len(group_ids))
        return await self._to_response(rule)

    async def partial_update_rule(self, rule_id: UUID, data: RulePatch) -> RuleResponse:
        group_ids = (
            parse_identifiers(data.group_ids, "group_ids")
            if data.group_ids is not None
            else None
        )

        async with Transaction(self.session) as tx:
            rules = tx.repository(RuleRepository)
            if not await rules.get_live(rule_id):
                raise NotFoundError(resource=RESOURCE_RULE, resource_id=str(rule_id))

            if data.name is not None:
                await self.names.ensure_unique(data.name, exclude_id=rule_id)
            rule = await rules.update(rule_id, name=data.name)

            if group_ids is not None:
                await RULE_GROUPS.replace(tx, rule_id, _group_rows(group_ids))

        logger.info("Rule patched", rule_id=str(rule_id))
        return await self._to_response(rule)

    async def delete_rule(self, rule_id: UUID) -> None:
        """Hard delete a rule and its group links.

        People pointing at the rule keep the id; their read view shows no rule.
        """
        async with Transaction(self.session) as tx:
            await self.deleter.delete(tx, rule_id)

        logger.info("Rule deleted", rule_id=str(rule_id))

    async def _to_response(self, rule: AccessControlRule) -> RuleResponse:
        links = await RULE_GROUPS.list_for(self.session, rule.id)
        groups = await self.assembler.resolve(
            AccessControlGroup, [link.access_control_group_id for link in links]
        )
        return RuleResponse(
            id=str(rule.id),
            name=rule.name,
            groups=[NamedReference(id=str(g.id), name=g.name) for g in groups],
            created_at=rule.created_at,
            updated_at=rule.updated_at,
        )
