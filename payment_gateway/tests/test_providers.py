import json
import httpx
import pytest
from payment_gateway.core.config import Settings
from payment_gateway.core.exceptions import ProviderRejectedError, ProviderUnavailableError
from payment_gateway.models.enums import Provider, TransactionStatus
from payment_gateway.schemas.payment import EasyMoneyPaymentRequest, SuperWalletzPaymentRequest
from payment_gateway.services.providers import EasyMoneyAdapter, SuperWalletzAdapter, build_adapter

EASY_MONEY_URL = "http://easy-money.test/process"
SUPER_WALLETZ_URL = "http://super-walletz.test/pay"


@pytest.fixture
async def easy_money(http_client):
    return EasyMoneyAdapter(http_client=http_client, endpoint=EASY_MONEY_URL)


@pytest.fixture
async def super_walletz(http_client):
    return SuperWalletzAdapter(http_client=http_client, endpoint=SUPER_WALLETZ_URL)


async def test_easy_money_success_is_final(easy_money, provider_stub):
    provider_stub.handler = lambda request: httpx.Response(200, json={"transaction_id": "em123"})

    result = await easy_money.initiate(EasyMoneyPaymentRequest(amount=100, currency="USD"))

    assert result.success
    assert result.transaction_id == "em123"
    assert result.raw_response == {"transaction_id": "em123"}
    assert easy_money.initial_status(result) == TransactionStatus.SUCCESS

    sent = provider_stub.requests[0]
    assert sent.method == "POST"
    assert str(sent.url) == EASY_MONEY_URL
    assert json.loads(sent.content) == {"amount": 100, "currency": "USD"}


async def test_easy_money_without_transaction_id(easy_money, provider_stub):
    provider_stub.handler = lambda request: httpx.Response(200, text="OK")

    result = await easy_money.initiate(EasyMoneyPaymentRequest(amount=5, currency="MXN"))

    assert result.transaction_id is None
    assert result.raw_response == "OK"


async def test_easy_money_rejection_carries_provider_body(easy_money, provider_stub):
    provider_stub.handler = lambda request: httpx.Response(400, json={"error": "insufficient funds"})

    with pytest.raises(ProviderRejectedError) as exc_info:
        await easy_money.initiate(EasyMoneyPaymentRequest(amount=100, currency="USD"))

    assert exc_info.value.message == "Failed to process payment"
    assert exc_info.value.details == {"error": "insufficient funds"}
    assert exc_info.value.provider_status_code == 400


async def test_easy_money_timeout_is_unavailable(easy_money, provider_stub):
    def timeout(request):
        raise httpx.ReadTimeout("timed out", request=request)
    provider_stub.handler = timeout

    with pytest.raises(ProviderUnavailableError) as exc_info:
        await easy_money.initiate(EasyMoneyPaymentRequest(amount=100, currency="USD"))
    assert exc_info.value.provider == Provider.EASY_MONEY.value


async def test_connection_error_is_unavailable(super_walletz, provider_stub):
    def refused(request):
        raise httpx.ConnectError("connection refused", request=request)
    provider_stub.handler = refused

    request = SuperWalletzPaymentRequest(amount=10, currency="EUR", callback_url="https://shop.test/cb")
    with pytest.raises(ProviderUnavailableError) as exc_info:
        await super_walletz.initiate(request)
    assert exc_info.value.message == "Failed to initiate payment"


async def test_super_walletz_acceptance_is_pending(super_walletz, provider_stub):
    provider_stub.handler = lambda request: httpx.Response(200, json={"transaction_id": "sw999"})

    request = SuperWalletzPaymentRequest(amount=25.5, currency="EUR", callback_url="https://shop.test/cb")
    result = await super_walletz.initiate(request)

    assert result.transaction_id == "sw999"
    assert super_walletz.initial_status(result) == TransactionStatus.PENDING
    assert json.loads(provider_stub.requests[0].content) == {
        "amount": 25.5,
        "currency": "EUR",
        "callback_url": "https://shop.test/cb",
    }


async def test_super_walletz_numeric_transaction_id(super_walletz, provider_stub):
    provider_stub.handler = lambda request: httpx.Response(201, json={"transaction_id": 4711})

    request = SuperWalletzPaymentRequest(amount=1, currency="USD", callback_url="https://shop.test/cb")
    result = await super_walletz.initiate(request)

    assert result.transaction_id == "4711"


async def test_super_walletz_without_transaction_id_is_rejected(super_walletz, provider_stub):
    provider_stub.handler = lambda request: httpx.Response(200, json={"status": "accepted"})

    request = SuperWalletzPaymentRequest(amount=1, currency="USD", callback_url="https://shop.test/cb")
    with pytest.raises(ProviderRejectedError) as exc_info:
        await super_walletz.initiate(request)
    assert exc_info.value.details == {"status": "accepted"}


async def test_build_adapter_uses_configured_endpoint(http_client):
    settings = Settings(PROVIDER_ENDPOINTS={"EasyMoney": EASY_MONEY_URL, "SuperWalletz": SUPER_WALLETZ_URL})

    adapter = build_adapter(Provider.SUPER_WALLETZ, http_client, settings)

    assert isinstance(adapter, SuperWalletzAdapter)
    assert adapter.endpoint == SUPER_WALLETZ_URL


async def test_build_adapter_without_endpoint(http_client):
    settings = Settings(PROVIDER_ENDPOINTS={"EasyMoney": EASY_MONEY_URL})

    with pytest.raises(ValueError):
        build_adapter(Provider.SUPER_WALLETZ, http_client, settings)
