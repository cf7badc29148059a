"""Tests for the search pipeline (predicate, pagination) against SQLite."""

import pytest
from sqlalchemy.dialects import postgresql

from solace.pipelines.search import (
    PageRequest,
    build_search_predicate,
    build_search_query,
    escape_like,
    search_advocates,
)


def test_page_request_offset():
    assert PageRequest(page=1, page_size=20).offset == 0
    assert PageRequest(page=3, page_size=5).offset == 10


@pytest.mark.parametrize("page,page_size", [(0, 5), (1, 0), (-2, 10)])
def test_page_request_rejects_non_positive(page, page_size):
    with pytest.raises(ValueError):
        PageRequest(page=page, page_size=page_size)


def test_escape_like_escapes_wildcards():
    assert escape_like("100%") == "100/%"
    assert escape_like("a_b") == "a/_b"
    assert escape_like("x/y") == "x//y"


def test_empty_term_has_no_predicate():
    assert build_search_predicate("") is None
    assert build_search_predicate("   ") is None


def test_postgres_query_uses_ilike_and_jsonb_elements():
    query = build_search_query("adhd", PageRequest(page=2, page_size=5))
    sql = str(query.compile(dialect=postgresql.dialect()))

    assert sql.count("ILIKE") == 5
    assert "jsonb_array_elements_text(advocates.specialties)" in sql
    assert "ORDER BY advocates.id" in sql
    assert "LIMIT" in sql and "OFFSET" in sql


@pytest.mark.asyncio
async def test_empty_term_returns_unfiltered_page_of_requested_size(session, seeded):
    rows = await search_advocates(session, "", page=1, page_size=10)
    assert len(rows) == 10
    assert [r.id for r in rows] == sorted(r.id for r in seeded)[:10]


@pytest.mark.asyncio
async def test_default_page_size_returns_everything_seeded(session, seeded):
    rows = await search_advocates(session)
    assert len(rows) == len(seeded) == 15


@pytest.mark.asyncio
async def test_specialty_only_match(session, seeded):
    rows = await search_advocates(session, "adhd", page_size=20)
    names = {(r.first_name, r.last_name) for r in rows}

    assert names == {("John", "Doe"), ("Daniel", "Lewis")}
    for row in rows:
        assert any("adhd" in s.lower() for s in row.specialties)


@pytest.mark.asyncio
async def test_term_is_trimmed_and_case_insensitive(session, seeded):
    rows = await search_advocates(session, "  NEW york ", page_size=20)
    assert [(r.first_name, r.city) for r in rows] == [("John", "New York")]


@pytest.mark.asyncio
async def test_degree_match(session, seeded):
    rows = await search_advocates(session, "md", page_size=20)
    assert {r.degree for r in rows} == {"MD"}
    assert len(rows) == 5


@pytest.mark.asyncio
async def test_wildcards_match_literally(session, seeded):
    assert await search_advocates(session, "%", page_size=20) == []
    assert await search_advocates(session, "_", page_size=20) == []


@pytest.mark.asyncio
async def test_pages_do_not_overlap(session, seeded):
    seen = []
    for page in (1, 2, 3):
        rows = await search_advocates(session, "", page=page, page_size=5)
        assert len(rows) == 5
        seen.extend(r.id for r in rows)

    assert len(seen) == len(set(seen)) == 15
    assert await search_advocates(session, "", page=4, page_size=5) == []


@pytest.mark.asyncio
async def test_search_results_paginate(session, seeded):
    first = await search_advocates(session, "md", page=1, page_size=3)
    second = await search_advocates(session, "md", page=2, page_size=3)

    assert len(first) == 3
    assert len(second) == 2
    assert not {r.id for r in first} & {r.id for r in second}
