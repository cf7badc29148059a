"""Search pipeline: free-text predicate plus limit/offset pagination.

A non-empty term matches an advocate when first name, last name, city or
degree contains it case-insensitively, or when any specialty tag does.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import Boolean, ColumnElement, Select, bindparam, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.visitors import InternalTraversal
from sqlalchemy.ext.compiler import compiles

from solace import models
from solace.config import settings
from solace.db import CONNECTION_ERRORS, DatabaseUnavailableError

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "/"

TEXT_COLUMNS = (
    models.Advocate.first_name,
    models.Advocate.last_name,
    models.Advocate.city,
    models.Advocate.degree,
)


@dataclass(frozen=True)
class PageRequest:
    """1-based page of a fixed size."""
    page: int = 1
    page_size: int = 20

    def __post_init__(self):
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class SpecialtyMatch(ColumnElement):
    """EXISTS test: does any element of a JSON string array match a LIKE pattern?

    Compiled per dialect below. The pattern is expected to be pre-escaped
    with ``LIKE_ESCAPE``.
    """

    inherit_cache = True
    type = Boolean()

    _traverse_internals = [
        ("column", InternalTraversal.dp_clauseelement),
        ("pattern", InternalTraversal.dp_clauseelement),
    ]

    def __init__(self, column, pattern: str):
        self.column = column
        self.pattern = bindparam("specialty_pattern", pattern, unique=True)


@compiles(SpecialtyMatch)
def _compile_specialty_match(element, compiler, **kw):
    return (
        "EXISTS (SELECT 1 FROM jsonb_array_elements_text(%s) AS tag "
        "WHERE tag ILIKE %s ESCAPE '%s')"
        % (compiler.process(element.column, **kw), compiler.process(element.pattern, **kw), LIKE_ESCAPE)
    )


@compiles(SpecialtyMatch, "sqlite")
def _compile_specialty_match_sqlite(element, compiler, **kw):
    return (
        "EXISTS (SELECT 1 FROM json_each(%s) AS tag "
        "WHERE lower(tag.value) LIKE lower(%s) ESCAPE '%s')"
        % (compiler.process(element.column, **kw), compiler.process(element.pattern, **kw), LIKE_ESCAPE)
    )


def escape_like(term: str, escape: str = LIKE_ESCAPE) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return (
        term.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


def normalize_term(term: str | None) -> str:
    return (term or "").strip()


def build_search_predicate(term: str) -> ColumnElement[bool] | None:
    """OR'd case-insensitive containment over text columns and specialty tags.

    Returns None for an empty term (no filtering).
    """
    term = normalize_term(term)
    if not term:
        return None

    pattern = f"%{escape_like(term)}%"
    clauses = [column.ilike(pattern, escape=LIKE_ESCAPE) for column in TEXT_COLUMNS]
    clauses.append(SpecialtyMatch(models.Advocate.specialties, pattern))
    return or_(*clauses)


def build_search_query(term: str | None, page: PageRequest) -> Select:
    """Select one page of matching advocates, ordered by id for stable paging."""
    query = select(models.Advocate)
    predicate = build_search_predicate(term or "")
    if predicate is not None:
        query = query.where(predicate)
    return query.order_by(models.Advocate.id).limit(page.page_size).offset(page.offset)


async def search_advocates(
    session: AsyncSession,
    term: str | None = None,
    page: int = 1,
    page_size: int | None = None,
) -> list[models.Advocate]:
    """Fetch one page of advocates matching ``term``.

    Args:
        session: Database session
        term: Free-text search term (empty means unfiltered)
        page: 1-based page number
        page_size: Rows per page (defaults to settings.search.default_page_size)

    Returns:
        List of Advocate rows, at most ``page_size`` long

    Raises:
        DatabaseUnavailableError: If a connection cannot be established
    """
    request = PageRequest(page=page, page_size=page_size or settings.search.default_page_size)
    term = normalize_term(term)
    query = build_search_query(term, request)

    try:
        result = await session.execute(query)
    except CONNECTION_ERRORS as e:
        logger.error(f"Database unavailable during search: {e}")
        raise DatabaseUnavailableError() from e

    rows = list(result.scalars().all())
    logger.info(
        f"Search term={term!r} page={request.page} page_size={request.page_size} -> {len(rows)} rows"
    )
    return rows
