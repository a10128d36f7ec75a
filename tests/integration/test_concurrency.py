"""Concurrent request tests.

Each request runs in its own session, so these exercise the same
interleavings as parallel clients against a deployed server.
"""

import asyncio
import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from reading_tracker.models import Reading, ReadingRecord

CONCURRENT_REQUESTS = 8


@pytest.mark.asyncio
async def test_concurrent_appends_are_all_kept(client: AsyncClient, auth_headers, book, session_factory):
    reading = (
        await client.post(
            "/v1/readings",
            json={"reading_type": "book", "document_id": str(book.id)},
            headers=auth_headers,
        )
    ).json()

    responses = await asyncio.gather(
        *(
            client.post(
                f"/v1/readings/{reading['id']}/records",
                json={"progress": f"p.{i}"},
                headers=auth_headers,
            )
            for i in range(CONCURRENT_REQUESTS)
        )
    )

    assert [r.status_code for r in responses] == [201] * CONCURRENT_REQUESTS

    records = (await client.get(f"/v1/readings/{reading['id']}/records", headers=auth_headers)).json()
    assert sorted(r["progress"] for r in records) == sorted(f"p.{i}" for i in range(CONCURRENT_REQUESTS))

    async with session_factory() as session:
        stmt = (
            select(func.count())
            .select_from(ReadingRecord)
            .where(ReadingRecord.reading_id == uuid.UUID(reading["id"]))
        )
        count = await session.scalar(stmt)
        assert count == CONCURRENT_REQUESTS


@pytest.mark.asyncio
async def test_concurrent_duplicate_start_creates_one_reading(
    client: AsyncClient, auth_headers, book, session_factory
):
    responses = await asyncio.gather(
        *(
            client.post(
                "/v1/readings",
                json={"reading_type": "book", "document_id": str(book.id)},
                headers=auth_headers,
            )
            for _ in range(CONCURRENT_REQUESTS)
        )
    )

    codes = sorted(r.status_code for r in responses)
    assert codes == [201] + [409] * (CONCURRENT_REQUESTS - 1)
    assert all(r.json()["error"]["code"] == "DUPLICATE" for r in responses if r.status_code == 409)

    async with session_factory() as session:
        count = await session.scalar(select(func.count()).select_from(Reading))
        assert count == 1


@pytest.mark.asyncio
async def test_concurrent_add_to_list_is_set_like(client: AsyncClient, auth_headers, book):
    reading = (
        await client.post(
            "/v1/readings",
            json={"reading_type": "book", "document_id": str(book.id)},
            headers=auth_headers,
        )
    ).json()
    reading_list = (await client.post("/v1/reading-lists", json={"name": "Queue"}, headers=auth_headers)).json()

    responses = await asyncio.gather(
        *(
            client.put(
                f"/v1/reading-lists/{reading_list['id']}/add-readings",
                json={"reading_ids": [reading["id"]]},
                headers=auth_headers,
            )
            for _ in range(CONCURRENT_REQUESTS)
        )
    )

    assert all(r.status_code == 200 for r in responses)
    assert sum(r.json()["changed"] for r in responses) == 1

    response = await client.get(f"/v1/reading-lists/{reading_list['id']}", headers=auth_headers)
    assert response.json()["reading_ids"] == [reading["id"]]
