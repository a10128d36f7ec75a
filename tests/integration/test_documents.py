"""Catalog and custom document endpoint tests."""

import uuid

import pytest
from httpx import AsyncClient

BOOK_PAYLOAD = {
    "name": "The Left Hand of Darkness",
    "author": "Ursula K. Le Guin",
    "isbn": "9780441478125",
    "pages": 304,
}


class TestBooks:
    """Book catalog."""

    @pytest.mark.asyncio
    async def test_admin_creates_book(self, client: AsyncClient, admin_headers):
        response = await client.post("/v1/books", json=BOOK_PAYLOAD, headers=admin_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == BOOK_PAYLOAD["name"]
        assert data["language"] == "en"

    @pytest.mark.asyncio
    async def test_regular_user_cannot_create_book(self, client: AsyncClient, auth_headers):
        response = await client.post("/v1/books", json=BOOK_PAYLOAD, headers=auth_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_duplicate_isbn_conflicts(self, client: AsyncClient, admin_headers, book):
        payload = {**BOOK_PAYLOAD, "isbn": book.isbn}
        response = await client.post("/v1/books", json=payload, headers=admin_headers)

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_get_book_by_id_and_isbn(self, client: AsyncClient, auth_headers, book):
        by_id = await client.get(f"/v1/books/{book.id}", headers=auth_headers)
        by_isbn = await client.get(f"/v1/books/isbn/{book.isbn}", headers=auth_headers)

        assert by_id.status_code == 200
        assert by_isbn.status_code == 200
        assert by_id.json()["id"] == by_isbn.json()["id"] == str(book.id)

    @pytest.mark.asyncio
    async def test_missing_book_is_not_found(self, client: AsyncClient, auth_headers):
        response = await client.get(f"/v1/books/{uuid.uuid4()}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_list_filters_by_name_prefix(self, client: AsyncClient, auth_headers, admin_headers, book):
        await client.post("/v1/books", json=BOOK_PAYLOAD, headers=admin_headers)

        response = await client.get("/v1/books", params={"name": "du"}, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert [b["name"] for b in data["data"]] == ["Dune"]
        assert data["pagination"]["total"] == 1

    @pytest.mark.asyncio
    async def test_empty_listing_is_not_an_error(self, client: AsyncClient, auth_headers):
        response = await client.get("/v1/books", params={"author": "nobody"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"] == []

    @pytest.mark.asyncio
    async def test_admin_updates_and_deletes_book(self, client: AsyncClient, admin_headers, book):
        response = await client.patch(
            f"/v1/books/{book.id}",
            json={"edition": "40th anniversary"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["edition"] == "40th anniversary"
        assert response.json()["name"] == "Dune"

        response = await client.delete(f"/v1/books/{book.id}", headers=admin_headers)
        assert response.status_code == 204

        response = await client.get(f"/v1/books/{book.id}", headers=admin_headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_filters_by_genre(self, client: AsyncClient, auth_headers, admin_headers, book):
        await client.post(
            "/v1/books",
            json={**BOOK_PAYLOAD, "genres": ["Science Fiction", "Feminist"]},
            headers=admin_headers,
        )

        response = await client.get("/v1/books", params={"genre": "FEMIN"}, headers=auth_headers)
        assert [b["name"] for b in response.json()["data"]] == [BOOK_PAYLOAD["name"]]

        response = await client.get("/v1/books", params={"genre": "fiction"}, headers=auth_headers)
        assert sorted(b["name"] for b in response.json()["data"]) == ["Dune", BOOK_PAYLOAD["name"]]

        response = await client.get("/v1/books", params={"genre": "romance"}, headers=auth_headers)
        assert response.json()["data"] == []

    @pytest.mark.asyncio
    async def test_genre_match_stays_within_one_genre(
        self, client: AsyncClient, auth_headers, admin_headers
    ):
        await client.post(
            "/v1/books",
            json={**BOOK_PAYLOAD, "genres": ["war", "drama"]},
            headers=admin_headers,
        )

        response = await client.get("/v1/books", params={"genre": 'war", "drama'}, headers=auth_headers)

        assert response.json()["data"] == []

    @pytest.mark.asyncio
    async def test_wildcards_in_filters_match_literally(self, client: AsyncClient, auth_headers, book):
        for params in ({"name": "%"}, {"name": "_une"}, {"author": "%"}, {"genre": "_"}):
            response = await client.get("/v1/books", params=params, headers=auth_headers)

            assert response.status_code == 200
            assert response.json()["data"] == [], params

        response = await client.get("/v1/books", params={"name": "Du"}, headers=auth_headers)
        assert [b["name"] for b in response.json()["data"]] == ["Dune"]


class TestMangas:
    """Manga catalog."""

    @pytest.mark.asyncio
    async def test_list_filters_by_demography(self, client: AsyncClient, auth_headers, admin_headers, manga):
        await client.post(
            "/v1/mangas",
            json={
                "title": "Yotsuba&!",
                "author": "Kiyohiko Azuma",
                "volume": 1,
                "chapters": 7,
                "demography": "shonen",
            },
            headers=admin_headers,
        )

        response = await client.get("/v1/mangas", params={"demography": "seinen"}, headers=auth_headers)

        assert response.status_code == 200
        assert [m["title"] for m in response.json()["data"]] == ["Vinland Saga"]

    @pytest.mark.asyncio
    async def test_get_manga(self, client: AsyncClient, auth_headers, manga):
        response = await client.get(f"/v1/mangas/{manga.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["demography"] == "seinen"

    @pytest.mark.asyncio
    async def test_list_filters_by_genre(self, client: AsyncClient, auth_headers, admin_headers, manga):
        await client.post(
            "/v1/mangas",
            json={
                "title": "Yotsuba&!",
                "author": "Kiyohiko Azuma",
                "volume": 1,
                "chapters": 7,
                "demography": "shonen",
                "genres": ["comedy", "slice of life"],
            },
            headers=admin_headers,
        )

        response = await client.get("/v1/mangas", params={"genre": "Historical"}, headers=auth_headers)
        assert [m["title"] for m in response.json()["data"]] == ["Vinland Saga"]

        response = await client.get(
            "/v1/mangas",
            params={"genre": "comedy", "demography": "seinen"},
            headers=auth_headers,
        )
        assert response.json()["data"] == []

    @pytest.mark.asyncio
    async def test_title_prefix_is_literal(self, client: AsyncClient, auth_headers, manga):
        response = await client.get("/v1/mangas", params={"title": "%Saga"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"] == []


class TestCustomDocuments:
    """The caller's own documents."""

    @pytest.mark.asyncio
    async def test_create_and_list(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/v1/users/me/documents",
            json={"title": "Notes", "author": "Me", "description": "Lecture notes"},
            headers=auth_headers,
        )
        assert response.status_code == 201

        response = await client.get("/v1/users/me/documents", headers=auth_headers)
        assert [d["title"] for d in response.json()] == ["Notes"]

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, client: AsyncClient, auth_headers, custom_document):
        response = await client.patch(
            f"/v1/users/me/documents/{custom_document.id}",
            json={"status": "final"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "final"
        assert data["title"] == "Thesis draft"
        assert data["tags"] == ["research"]

    @pytest.mark.asyncio
    async def test_other_user_cannot_see_document(self, client: AsyncClient, other_auth_headers, custom_document):
        response = await client.get(
            f"/v1/users/me/documents/{custom_document.id}",
            headers=other_auth_headers,
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, auth_headers, custom_document):
        response = await client.delete(f"/v1/users/me/documents/{custom_document.id}", headers=auth_headers)
        assert response.status_code == 204

        response = await client.delete(f"/v1/users/me/documents/{custom_document.id}", headers=auth_headers)
        assert response.status_code == 404
