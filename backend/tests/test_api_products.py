"""
Storefront Backend — Product API Tests
========================================

What:  /api/products over HTTP against a SQLite database: status codes,
       camelCase bodies, and the error body shape.
"""

import json

import pytest

from storefront.config import settings
from storefront.database import async_session_factory
from storefront.models.product import Product
from storefront.repositories.sql import SQLAlchemyRepository
from storefront.services.seed_service import SAMPLE_PRODUCTS, seed_catalog

PRODUCT_FIELDS = {
    "name": "Wayfarer Bold",
    "variant": "Black / Grey",
    "price": "999000",
    "originalPrice": "1199000",
    "category": "sunglasses",
    "colors": json.dumps(["#000000", "#555555"]),
    "rating": "4.6",
    "reviews": "89",
    "isNew": "true",
    "badge": "Новинка",
}


def image_files(count, ext="jpg", content_type="image/jpeg", payload=b"\xff\xd8\xff\xd9"):
    return [("images", (f"shot-{i}.{ext}", payload, content_type)) for i in range(count)]


async def create_product(client, count=2, **fields):
    data = {**PRODUCT_FIELDS, **fields}
    return await client.post("/api/products", data=data, files=image_files(count))


class TestProductCreate:

    @pytest.mark.asyncio
    async def test_create_returns_camel_case_product(self, test_client):
        response = await create_product(test_client, count=3)

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Wayfarer Bold"
        assert body["price"] == 999000
        assert body["originalPrice"] == 1199000
        assert body["isNew"] is True
        assert body["colors"] == ["#000000", "#555555"]
        assert "createdAt" in body
        assert [name.split("-", 1)[1] for name in body["images"]] == ["shot-0.jpg", "shot-1.jpg", "shot-2.jpg"]

    @pytest.mark.asyncio
    async def test_created_images_are_served(self, test_client):
        body = (await create_product(test_client)).json()

        response = await test_client.get(f"/uploads/{body['images'][0]}")

        assert response.status_code == 200
        assert response.content == b"\xff\xd8\xff\xd9"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [0, 1, 11])
    async def test_image_count_out_of_range(self, test_client, count):
        response = await create_product(test_client, count=count)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert (await test_client.get("/api/products")).json() == []

    @pytest.mark.asyncio
    async def test_disallowed_image_type(self, test_client):
        files = image_files(1) + image_files(1, ext="gif", content_type="image/gif")

        response = await test_client.post("/api/products", data=PRODUCT_FIELDS, files=files)

        assert response.status_code == 400
        assert "Only images" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_oversized_image(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "max_file_size", 16)
        files = image_files(2, payload=b"x" * 17)

        response = await test_client.post("/api/products", data=PRODUCT_FIELDS, files=files)

        assert response.status_code == 400
        assert response.json()["error"] == "file_too_large"

    @pytest.mark.asyncio
    async def test_malformed_colors(self, test_client):
        response = await create_product(test_client, colors="black")

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "colors"

    @pytest.mark.asyncio
    async def test_unparseable_original_price(self, test_client):
        response = await create_product(test_client, originalPrice="abc")

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "originalPrice"
        assert (await test_client.get("/api/products")).json() == []

    @pytest.mark.asyncio
    async def test_empty_original_price_means_none(self, test_client):
        response = await create_product(test_client, originalPrice="")

        assert response.status_code == 201
        assert response.json()["originalPrice"] is None

    @pytest.mark.asyncio
    async def test_price_outside_integer_range(self, test_client):
        response = await create_product(test_client, price="99999999999999999999")

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert (await test_client.get("/api/products")).json() == []

    @pytest.mark.asyncio
    async def test_error_body_shape(self, test_client):
        response = await create_product(test_client, price="free")

        body = response.json()
        assert response.status_code == 400
        assert set(body) == {"error", "message", "details", "request_id"}
        assert body["request_id"] == response.headers["X-Request-ID"]


class TestProductReadUpdateDelete:

    @pytest.mark.asyncio
    async def test_get_matches_create_response(self, test_client):
        created = (await create_product(test_client)).json()

        fetched = (await test_client.get(f"/api/products/{created['id']}")).json()

        created.pop("createdAt")
        fetched.pop("createdAt")
        assert fetched == created

    @pytest.mark.asyncio
    async def test_list_contains_created(self, test_client):
        first = (await create_product(test_client, name="First")).json()
        second = (await create_product(test_client, name="Second")).json()

        listed = (await test_client.get("/api/products")).json()

        assert {p["id"] for p in listed} == {first["id"], second["id"]}

    @pytest.mark.asyncio
    async def test_unknown_product(self, test_client):
        response = await test_client.get("/api/products/not-a-real-id")

        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"

    @pytest.mark.asyncio
    async def test_partial_update(self, test_client):
        created = (await create_product(test_client)).json()

        response = await test_client.put(
            f"/api/products/{created['id']}",
            json={"price": 899000, "badge": None, "unknownField": 1},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["price"] == 899000
        assert body["badge"] is None
        assert body["name"] == created["name"]
        assert body["images"] == created["images"]
        assert (await test_client.get(f"/api/products/{created['id']}")).json()["price"] == 899000

    @pytest.mark.asyncio
    async def test_update_may_shrink_images(self, test_client):
        created = (await create_product(test_client)).json()

        response = await test_client.put(
            f"/api/products/{created['id']}", json={"images": created["images"][:1]}
        )

        assert response.status_code == 200
        assert response.json()["images"] == created["images"][:1]

    @pytest.mark.asyncio
    async def test_update_wrong_type(self, test_client):
        created = (await create_product(test_client)).json()

        response = await test_client.put(f"/api/products/{created['id']}", json={"price": "cheap"})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["price", "originalPrice", "reviews"])
    async def test_update_integer_outside_range(self, test_client, field):
        created = (await create_product(test_client)).json()

        response = await test_client.put(
            f"/api/products/{created['id']}", json={field: 99999999999999999999}
        )

        assert response.status_code == 400
        fetched = (await test_client.get(f"/api/products/{created['id']}")).json()
        assert fetched[field] == created[field]

    @pytest.mark.asyncio
    async def test_update_null_required_field(self, test_client):
        created = (await create_product(test_client)).json()

        response = await test_client.put(f"/api/products/{created['id']}", json={"name": None})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_unknown_product(self, test_client):
        response = await test_client.put("/api/products/nope", json={"price": 1})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_then_fetch(self, test_client):
        created = (await create_product(test_client)).json()

        response = await test_client.delete(f"/api/products/{created['id']}")
        assert response.status_code == 204
        assert response.content == b""

        assert (await test_client.get(f"/api/products/{created['id']}")).status_code == 404
        assert (await test_client.delete(f"/api/products/{created['id']}")).status_code == 404


class TestSeededCatalog:

    @pytest.mark.asyncio
    async def test_seeded_products_are_listed(self, test_client):
        async with async_session_factory() as session:
            inserted = await seed_catalog(SQLAlchemyRepository(session, Product))

        response = await test_client.get("/api/products")

        assert inserted == 6
        assert len(response.json()) == 6
        assert {p["category"] for p in response.json()} == {"sunglasses", "optical"}

    @pytest.mark.asyncio
    async def test_seeded_products_keep_sample_order(self, test_client):
        async with async_session_factory() as session:
            await seed_catalog(SQLAlchemyRepository(session, Product))

        first = [p["name"] for p in (await test_client.get("/api/products")).json()]
        second = [p["name"] for p in (await test_client.get("/api/products")).json()]

        assert first == second == [sample["name"] for sample in SAMPLE_PRODUCTS]


class TestApiDocs:

    @pytest.mark.asyncio
    async def test_interactive_docs_path(self, test_client):
        response = await test_client.get("/api-docs")

        assert response.status_code == 200
        assert "swagger" in response.text.lower()
