# tests/adapters/test_api_endpoints.py
from datetime import timedelta
from uuid import uuid4

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock

from ecommerce.main import create_app
from ecommerce.shared.config import AppEnv, Settings, StorageBackend
from tests.conftest import TEST_PASSWORD


@pytest.fixture
def client(test_settings, container):
    """
    Returns a FastAPI TestClient.

    The 'container' fixture (from conftest.py) uses in-memory stores and a
    fixed clock, so tokens and timestamps are deterministic.
    """
    app = create_app(test_settings, container)
    with TestClient(app) as c:
        yield c


def _register(client, email="ada@example.com"):
    response = client.post(
        "/auth/register",
        json={"firstName": "Ada", "lastName": "Lovelace", "email": email, "password": TEST_PASSWORD},
    )
    assert response.status_code == status.HTTP_200_OK, response.text
    return response.json()


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _create_product(client, name, price, **extra):
    response = client.post("/api/products", json={"name": name, "price": price, **extra})
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


class TestAuthEndpoints:

    def test_register_success(self, client):
        data = _register(client)

        assert data["firstName"] == "Ada"
        assert data["lastName"] == "Lovelace"
        assert data["email"] == "ada@example.com"
        assert data["id"]
        assert data["token"].count(".") == 2

    def test_register_duplicate(self, client):
        _register(client)

        response = client.post(
            "/auth/register",
            json={"firstName": "Ada", "lastName": "L", "email": "ADA@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        body = response.json()
        assert body["status"] == "error"
        assert body["code"] == 409

    def test_register_invalid(self, client):
        response = client.post(
            "/auth/register",
            json={"firstName": "Ada", "lastName": "Lovelace", "email": "nope", "password": TEST_PASSWORD},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_missing_field(self, client):
        response = client.post("/auth/register", json={"firstName": "Ada"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"].startswith("Validation failed")

    def test_login_success(self, client):
        registered = _register(client)

        response = client.post("/auth/login", json={"email": "ada@example.com", "password": TEST_PASSWORD})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == registered["id"]

    def test_login_wrong_password(self, client):
        _register(client)

        response = client.post("/auth/login", json={"email": "ada@example.com", "password": "wrong-password"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {
            "status": "error",
            "code": 401,
            "message": "Invalid email or password.",
        }

    def test_login_unknown_email(self, client):
        response = client.post("/auth/login", json={"email": "ghost@example.com", "password": TEST_PASSWORD})
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestOrderEndpoints:

    @pytest.fixture
    def token(self, client):
        return _register(client)["token"]

    @pytest.fixture
    def products(self, client):
        return _create_product(client, "Widget", "10.00"), _create_product(client, "Gadget", "15")

    def _order_payload(self, products, name="First order"):
        widget, gadget = products
        return {
            "name": name,
            "items": [
                {"productId": widget["id"], "quantity": 2},
                {"productId": gadget["id"], "quantity": 1},
            ],
        }

    def test_add_order(self, client, token, products):
        response = client.post("/api/order", json=self._order_payload(products), headers=_auth(token))

        assert response.status_code == status.HTTP_201_CREATED, response.text
        data = response.json()
        assert data["totalAmount"] == "35.00"
        assert data["name"] == "First order"
        assert response.headers["location"] == f"/api/order/{data['id']}"
        assert [i["unitPrice"] for i in data["items"]] == ["10.00", "15.00"]
        assert [i["quantity"] for i in data["items"]] == [2, 1]

    def test_add_order_requires_token(self, client, products):
        response = client.post("/api/order", json=self._order_payload(products))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["code"] == 401

    def test_add_order_rejects_bad_token(self, client, products):
        response = client.post(
            "/api/order", json=self._order_payload(products), headers=_auth("not.a.token")
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_add_order_rejects_expired_token(self, client, token, products, clock):
        clock.advance(timedelta(hours=2))

        response = client.post("/api/order", json=self._order_payload(products), headers=_auth(token))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_add_order_empty_items(self, client, token):
        response = client.post("/api/order", json={"name": "Empty", "items": []}, headers=_auth(token))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_add_order_unknown_product(self, client, token):
        payload = {"name": "Ghost", "items": [{"productId": str(uuid4()), "quantity": 1}]}

        response = client.post("/api/order", json=payload, headers=_auth(token))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_get_update_delete_cycle(self, client, token, products):
        created = client.post("/api/order", json=self._order_payload(products), headers=_auth(token)).json()
        order_url = f"/api/order/{created['id']}"

        fetched = client.get(order_url, headers=_auth(token))
        assert fetched.status_code == status.HTTP_200_OK
        assert fetched.json() == created

        widget, _ = products
        updated = client.put(
            order_url,
            json={"name": "Smaller", "items": [{"productId": widget["id"], "quantity": 1}]},
            headers=_auth(token),
        )
        assert updated.status_code == status.HTTP_200_OK
        assert updated.json()["totalAmount"] == "10.00"
        assert updated.json()["createdAt"] == created["createdAt"]

        deleted = client.delete(order_url, headers=_auth(token))
        assert deleted.status_code == status.HTTP_200_OK
        assert deleted.json()["name"] == "Smaller"

        assert client.get(order_url, headers=_auth(token)).status_code == status.HTTP_404_NOT_FOUND
        assert client.delete(order_url, headers=_auth(token)).status_code == status.HTTP_404_NOT_FOUND

    def test_update_missing(self, client, token, products):
        response = client.put(
            f"/api/order/{uuid4()}", json=self._order_payload(products), headers=_auth(token)
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_list_user_orders(self, client, products):
        user = _register(client)
        headers = _auth(user["token"])
        client.post("/api/order", json=self._order_payload(products, "one"), headers=headers)
        client.post("/api/order", json=self._order_payload(products, "two"), headers=headers)

        response = client.get(f"/api/order/user/{user['id']}", headers=headers)

        assert response.status_code == status.HTTP_200_OK
        assert {o["name"] for o in response.json()} == {"one", "two"}
        assert all(o["userId"] == user["id"] for o in response.json())

    def test_malformed_order_id(self, client, token):
        response = client.get("/api/order/not-a-uuid", headers=_auth(token))
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestProductEndpoints:

    def test_create_and_get(self, client):
        created = _create_product(client, "Lamp", "19.5", category="Home", stockQuantity=3)

        assert created["price"] == "19.50"
        assert created["currency"] == "USD"
        assert created["stockQuantity"] == 3

        response = client.get(f"/api/products/{created['id']}")
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == created

    def test_list(self, client):
        _create_product(client, "B", "1.00")
        _create_product(client, "A", "2.00")

        response = client.get("/api/products")

        assert [p["name"] for p in response.json()] == ["A", "B"]

    def test_create_duplicate(self, client):
        _create_product(client, "Lamp", "1.00")
        response = client.post("/api/products", json={"name": "Lamp", "price": "2.00"})
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_create_negative_price(self, client):
        response = client.post("/api/products", json={"name": "Lamp", "price": "-2.00"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_get_missing(self, client):
        response = client.get(f"/api/products/{uuid4()}")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update(self, client):
        created = _create_product(client, "Lamp", "1.00")

        response = client.put(f"/api/products/{created['id']}", json={"price": "3.25"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["price"] == "3.25"
        assert response.json()["name"] == "Lamp"

    def test_create_blank_name(self, client):
        response = client.post("/api/products", json={"name": "   ", "price": "2.00"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_null_clears_brand_only_when_sent(self, client):
        created = _create_product(client, "Lamp", "1.00", brand="Acme", category="Home")
        url = f"/api/products/{created['id']}"

        kept = client.put(url, json={"price": "2.00"})
        assert kept.json()["brand"] == "Acme"

        cleared = client.put(url, json={"brand": None})
        assert cleared.status_code == status.HTTP_200_OK
        assert cleared.json()["brand"] is None
        assert cleared.json()["category"] == "Home"

    def test_update_missing(self, client):
        response = client.put(f"/api/products/{uuid4()}", json={"price": "3.25"})
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_by_name(self, client):
        _create_product(client, "Lamp", "1.00")

        response = client.delete("/api/products/Lamp")
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""

        assert client.delete("/api/products/Lamp").status_code == status.HTTP_404_NOT_FOUND
        assert client.get("/api/products").json() == []


class TestHealthEndpoints:

    def test_liveness(self, client):
        response = client.get("/health/live")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "ok"

    def test_readiness_all_up(self, client):
        response = client.get("/health/ready")
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"users": "up", "orders": "up", "products": "up"}

    def test_readiness_store_down(self, test_settings, container, mock_order_repo):
        mock_order_repo.health_check = AsyncMock(return_value=False)
        container.order_repository.override(mock_order_repo)

        with TestClient(create_app(test_settings, container)) as client:
            response = client.get("/health/ready")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["orders"] == "down"


class TestAppFactory:

    def test_production_refuses_default_secret(self):
        settings = Settings(APP_ENV=AppEnv.PRODUCTION, LOG_LEVEL="WARNING")
        with pytest.raises(RuntimeError):
            create_app(settings)

    def test_sql_backend_end_to_end(self, tmp_path):
        settings = Settings(
            APP_ENV=AppEnv.TESTING,
            JWT_SECRET="sql-backend-secret-with-enough-bytes!",
            BCRYPT_ROUNDS=4,
            STORAGE_BACKEND=StorageBackend.SQL,
            DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'shop.db'}",
            LOG_LEVEL="WARNING",
        )

        with TestClient(create_app(settings)) as client:
            token = _register(client)["token"]
            widget = _create_product(client, "Widget", "10.00")
            gadget = _create_product(client, "Gadget", "15.00")
            payload = {
                "name": "Persisted",
                "items": [
                    {"productId": widget["id"], "quantity": 2},
                    {"productId": gadget["id"], "quantity": 1},
                ],
            }

            created = client.post("/api/order", json=payload, headers=_auth(token))
            assert created.status_code == status.HTTP_201_CREATED, created.text
            assert created.json()["totalAmount"] == "35.00"

            fetched = client.get(created.headers["location"], headers=_auth(token))
            assert fetched.json()["items"] == created.json()["items"]
            assert client.get("/health/ready").status_code == status.HTTP_200_OK
