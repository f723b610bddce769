"""민원 조회 조건 빌더.

Complaint query builder. Composes the role-scoped, filtered, ordered SELECT
for complaint lists. Role scoping is always applied first and every filter
is ANDed on top of it, so no filter combination can widen an actor's scope.
All values are bound parameters.
"""

from typing import assert_never

from sqlalchemy import ColumnElement, Select, or_, select, true

from complaint_portal.models.complaint import Complaint
from complaint_portal.models.enums import Role
from complaint_portal.schemas.actor import Actor
from complaint_portal.schemas.complaint import ComplaintFilters

# LIKE 와일드카드 이스케이프 문자 — Escape character for LIKE wildcards
_LIKE_ESCAPE = "\\"


def scope_clause(actor: Actor) -> ColumnElement[bool]:
    """역할 기반 가시 범위 — Visibility predicate for the actor's role."""
    role = actor.role
    if role is Role.ADMIN:
        return true()
    if role is Role.STAFF:
        return Complaint.assignee_id == actor.id
    if role is Role.USER:
        return Complaint.submitter_id == actor.id
    assert_never(role)


def _escape_like(term: str) -> str:
    return (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def filter_clauses(filters: ComplaintFilters) -> list[ColumnElement[bool]]:
    """선택 필터 조건 목록 — Conjunctive optional filters; omitted ones add nothing."""
    clauses: list[ColumnElement[bool]] = []
    if filters.status is not None:
        clauses.append(Complaint.status == filters.status)
    if filters.category is not None:
        clauses.append(Complaint.category == filters.category)
    if filters.priority is not None:
        clauses.append(Complaint.priority == filters.priority)
    if filters.search:
        pattern = f"%{_escape_like(filters.search)}%"
        clauses.append(
            or_(
                Complaint.title.ilike(pattern, escape=_LIKE_ESCAPE),
                Complaint.description.ilike(pattern, escape=_LIKE_ESCAPE),
            )
        )
    return clauses


def build_complaint_query(actor: Actor, filters: ComplaintFilters) -> Select[tuple[Complaint]]:
    """민원 목록 쿼리 — Scoped, filtered query ordered newest first (id breaks ties)."""
    query = select(Complaint).where(scope_clause(actor))
    for clause in filter_clauses(filters):
        query = query.where(clause)
    return query.order_by(Complaint.created_at.desc(), Complaint.id.desc())
