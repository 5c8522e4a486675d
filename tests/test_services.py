"""OtlubService: token side effects, filters on the wire and cancellation."""

import asyncio
import json
import threading

import httpx
import pytest

from otlub_client.auth import TokenStore
from otlub_client.errors import ProtocolError, TransportError
from otlub_client.models import (
    Address,
    CreateOrderRequest,
    CreateProductRequest,
    Failure,
    OrderItem,
    ProductFilters,
    RegisterRequest,
    Success,
    UpdateUserRequest,
)
from otlub_client.sdk import build_service

from tests.conftest import envelope, user_payload


def login_ok(token="tok-123"):
    def handler(request):
        return httpx.Response(
            200,
            json={"token": token, "user": user_payload(), "expiresAt": "2030-01-01T00:00:00Z"},
        )

    return handler


async def test_login_stores_token_and_attaches_it_to_the_next_request(service, fake):
    fake.on("POST", "/auth/login", login_ok("tok-123"))
    fake.on("GET", "/user/me", lambda request: httpx.Response(200, json=envelope(user_payload())))

    outcome = await service.login("a@b.com", "pw")

    assert isinstance(outcome, Success)
    assert outcome.value.token == "tok-123"
    assert outcome.value.user.email == "a@b.com"
    assert service.is_authenticated() is True
    assert service.get_stored_token() == "tok-123"

    user = await service.get_current_user()

    assert user.value.id == "u1"
    assert fake.last_request.headers["Authorization"] == "Bearer tok-123"


async def test_login_sends_credentials_as_json(service, fake):
    fake.on("POST", "/auth/login", login_ok())

    await service.login("a@b.com", "pw")

    request = fake.requests[0]
    assert request.method == "POST"
    assert json.loads(request.content) == {"email": "a@b.com", "password": "pw"}


async def test_failed_login_leaves_store_untouched(service, fake):
    fake.on("POST", "/auth/login", lambda request: httpx.Response(401))

    outcome = await service.login("a@b.com", "wrong")

    assert isinstance(outcome, Failure)
    assert outcome.error.status_code == 401
    assert service.is_authenticated() is False


async def test_logout_clears_token_on_success(service, fake, token_store):
    token_store.save("tok")
    fake.on("POST", "/auth/logout", lambda request: httpx.Response(200))

    outcome = await service.logout()

    assert outcome == Success(None)
    assert fake.last_request.headers["Authorization"] == "Bearer tok"
    assert service.is_authenticated() is False


async def test_logout_clears_token_even_when_server_fails(service, fake, token_store):
    token_store.save("tok")
    fake.on("POST", "/auth/logout", lambda request: httpx.Response(500))

    outcome = await service.logout()

    assert isinstance(outcome.error, ProtocolError)
    assert service.get_stored_token() is None


async def test_logout_clears_token_when_network_is_down(service, fake, token_store):
    token_store.save("tok")

    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    fake.on("POST", "/auth/logout", handler)

    outcome = await service.logout()

    assert isinstance(outcome.error, TransportError)
    assert service.is_authenticated() is False


async def test_get_products_without_filters_matches_empty_mapping(service, fake):
    fake.on("GET", "/products", lambda request: httpx.Response(200, json=envelope([])))

    await service.get_products()
    await service.get_products({})

    first, second = fake.requests
    assert first.url == second.url
    assert str(first.url) == "https://api.example.test/products"


async def test_product_filters_become_query_params(service, fake):
    fake.on("GET", "/products", lambda request: httpx.Response(200, json=envelope([{"id": "p1"}])))

    outcome = await service.get_products(ProductFilters(category_id="c1", is_active=True, extra={"sort": "price"}))

    assert [product.id for product in outcome.value] == ["p1"]
    params = fake.last_request.url.params
    assert params["categoryId"] == "c1"
    assert params["isActive"] == "true"
    assert params["sort"] == "price"
    assert "search" not in params


async def test_get_product_unwraps_envelope(service, fake):
    fake.on(
        "GET",
        "/products/p1",
        lambda request: httpx.Response(200, json=envelope({"id": "p1", "name": "Widget"}, timestamp="t")),
    )

    outcome = await service.get_product("p1")

    assert outcome.value.id == "p1"
    assert outcome.value.name == "Widget"


async def test_get_product_missing_is_protocol_error(service, fake):
    outcome = await service.get_product("missing")

    assert isinstance(outcome, Failure)
    assert outcome.error.status_code == 404


async def test_update_user_sends_only_given_fields(service, fake):
    fake.on("PUT", "/user/me", lambda request: httpx.Response(200, json=envelope(user_payload())))

    await service.update_user(UpdateUserRequest(phone="555"))

    body = json.loads(fake.last_request.content)
    assert body == {"phone": "555"}


async def test_create_order_serializes_nested_request(service, fake):
    fake.on(
        "POST",
        "/orders",
        lambda request: httpx.Response(200, json=envelope({"id": "o1", "status": "pending"})),
    )
    address = Address(street="1 Main", city="Town", state="ST", country="US", postal_code="00001")
    request = CreateOrderRequest(
        items=(OrderItem(product_id="p1", quantity=2, price=5.0, total=10.0),),
        shipping_address=address,
        billing_address=address,
        payment_method="card",
    )

    outcome = await service.create_order(request)

    assert outcome.value.id == "o1"
    body = json.loads(fake.last_request.content)
    assert body["items"] == [{"productId": "p1", "quantity": 2, "price": 5.0, "total": 10.0}]
    assert body["shippingAddress"]["postalCode"] == "00001"
    assert body["paymentMethod"] == "card"


async def test_get_stock_uses_product_id_in_path(service, fake):
    fake.on(
        "GET",
        "/stock/p9",
        lambda request: httpx.Response(200, json=envelope({"quantity": 10, "reserved": 2, "available": 8})),
    )

    outcome = await service.get_stock("p9")

    assert outcome.value.available == 8


async def test_wallet_and_transactions(service, fake):
    fake.on("GET", "/ewallet", lambda request: httpx.Response(200, json=envelope({"id": "w1", "balance": 12.5})))
    fake.on(
        "GET",
        "/ewallet/transactions",
        lambda request: httpx.Response(200, json=envelope([{"id": "t1", "amount": 3}])),
    )

    wallet = await service.get_wallet()
    transactions = await service.get_transactions({"type": "debit"})

    assert wallet.value.balance == 12.5
    assert transactions.value[0].amount == 3.0
    assert fake.last_request.url.params["type"] == "debit"


async def test_health_check_is_raw(service, fake):
    fake.on("GET", "/health", lambda request: httpx.Response(200, json={"status": "ok", "version": "1"}))

    outcome = await service.health_check()

    assert outcome.value.status == "ok"


async def test_concurrent_calls_each_get_their_own_outcome(service, fake):
    fake.on("GET", "/orders", lambda request: httpx.Response(200, json=envelope([])))
    fake.on("GET", "/ewallet", lambda request: httpx.Response(503))

    orders, wallet = await asyncio.gather(service.get_orders(), service.get_wallet())

    assert orders == Success([])
    assert wallet.error.status_code == 503


async def test_destroy_cancels_calls_waiting_on_the_network(service, fake):
    started = asyncio.Event()

    async def hang(request):
        started.set()
        await asyncio.Event().wait()

    fake.on("GET", "/ewallet", hang)

    pending = asyncio.create_task(service.get_wallet())
    await started.wait()
    service.destroy()

    with pytest.raises(asyncio.CancelledError):
        await pending


async def test_calls_after_destroy_fail_without_touching_the_network(service, fake):
    service.destroy()

    outcome = await service.get_wallet()

    assert isinstance(outcome.error, TransportError)
    assert fake.requests == []


async def test_register_returns_enveloped_user(service, fake):
    fake.on("POST", "/auth/register", lambda request: httpx.Response(201, json=envelope(user_payload("u7"))))

    outcome = await service.register(
        RegisterRequest(email="a@b.com", password="pw", first_name="Ada", last_name="Lovelace", phone="555")
    )

    assert outcome.value.id == "u7"
    assert json.loads(fake.last_request.content)["phone"] == "555"
    assert service.is_authenticated() is False


async def test_create_product_posts_body(service, fake):
    fake.on("POST", "/products", lambda request: httpx.Response(200, json=envelope({"id": "p5", "name": "New"})))

    outcome = await service.create_product(
        CreateProductRequest(name="New", description="d", price=2.5, currency="EUR", category_id="c1")
    )

    assert outcome.value.id == "p5"
    assert json.loads(fake.last_request.content)["price"] == 2.5


async def test_clear_token_is_local(service, fake, token_store):
    token_store.save("tok")

    service.clear_token()

    assert service.get_stored_token() is None
    assert fake.requests == []


async def test_non_ascii_stored_token_is_a_failure_not_an_exception(service, fake, token_store):
    fake.on("GET", "/ewallet", lambda request: httpx.Response(200, json=envelope({"id": "w1"})))
    token_store.save("tök-1")

    outcome = await service.get_wallet()

    assert isinstance(outcome, Failure)
    assert isinstance(outcome.error, TransportError)
    assert fake.requests == []


class ThreadRecordingTokenStore(TokenStore):
    def __init__(self, persistence):
        super().__init__(persistence)
        self.threads = []

    def get(self):
        self.threads.append(threading.get_ident())
        return super().get()

    def save(self, token):
        self.threads.append(threading.get_ident())
        super().save(token)

    def clear(self):
        self.threads.append(threading.get_ident())
        super().clear()


async def test_token_file_io_stays_off_the_event_loop_thread(config, fake, file_persistence):
    store = ThreadRecordingTokenStore(file_persistence)
    fake.on("POST", "/auth/login", login_ok())
    fake.on("GET", "/ewallet", lambda request: httpx.Response(200, json=envelope({"id": "w1"})))
    fake.on("POST", "/auth/logout", lambda request: httpx.Response(200))
    loop_thread = threading.get_ident()

    async with build_service(config, transport=httpx.MockTransport(fake), token_store=store) as svc:
        await svc.login("a@b.com", "pw")
        await svc.get_wallet()
        await svc.logout()

    assert len(store.threads) == 4
    assert loop_thread not in store.threads


async def test_destroy_inside_a_running_loop_closes_connections(service):
    service.destroy()

    for _ in range(10):
        if service.closed:
            break
        await asyncio.sleep(0)

    assert service.closed is True
