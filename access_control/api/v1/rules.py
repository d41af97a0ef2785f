"""
Access Control Rule Endpoints

CRUD operations for rules and their group links. Requires the rule permission.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from access_control.api.dependencies import DbSession, RuleManager
from access_control.api.utils import validate_uuid
from access_control.schemas.common import PaginatedResponse, PaginationMeta, PaginationParams
from access_control.schemas.rule import RuleCreate, RulePatch, RuleResponse, RuleUpdate
from access_control.services.rule_service import RuleService


router = APIRouter()


@router.get("", response_model=PaginatedResponse[RuleResponse], summary="List rules")
async def list_rules(
    _current_user: RuleManager,
    db: DbSession,
    pagination: Annotated[PaginationParams, Depends()],
    name: Annotated[Optional[str], Query(description="Name contains")] = None,
) -> PaginatedResponse[RuleResponse]:
    rules, total = await RuleService(db).list_rules(
        offset=pagination.offset,
        limit=pagination.limit,
        name=name,
    )
    return PaginatedResponse[RuleResponse](
        data=rules,
        pagination=PaginationMeta.create(
            page=pagination.page, per_page=pagination.per_page, total=total
        ),
    )


@router.post(
    "",
    response_model=RuleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create rule",
)
async def create_rule(
    data: RuleCreate,
    _current_user: RuleManager,
    db: DbSession,
) -> RuleResponse:
    """Create a rule.

    Raises:
        400: Malformed group id
        404: A group does not exist
        409: Name already in use
    """
    return await RuleService(db).create_rule(data)


@router.get("/{rule_id}", response_model=RuleResponse, summary="Get rule")
async def get_rule(
    rule_id: str,
    _current_user: RuleManager,
    db: DbSession,
) -> RuleResponse:
    rule_uuid = validate_uuid(rule_id, "rule_id")
    return await RuleService(db).get_rule(rule_uuid)


@router.put("/{rule_id}", response_model=RuleResponse, summary="Replace rule")
async def update_rule(
    rule_id: str,
    data: RuleUpdate,
    _current_user: RuleManager,
    db: DbSession,
) -> RuleResponse:
    rule_uuid = validate_uuid(rule_id, "rule_id")
    return await RuleService(db).update_rule(rule_uuid, data)


@router.patch("/{rule_id}", response_model=RuleResponse, summary="Update rule")
async def partial_update_rule(
    rule_id: str,
    data: RulePatch,
    _current_user: RuleManager,
    db: DbSession,
) -> RuleResponse:
    rule_uuid = validate_uuid(rule_id, "rule_id")
    return await RuleService(db).partial_update_rule(rule_uuid, data)


@router.delete(
    "/{rule_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete rule",
)
async def delete_rule(
    rule_id: str,
    _current_user: RuleManager,
    db: DbSession,
) -> None:
    rule_uuid = validate_uuid(rule_id, "rule_id")
    await RuleService(db).delete_rule(rule_uuid)
