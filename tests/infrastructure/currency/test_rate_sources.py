"""🧪 AwesomeApiRateSource поверх httpx.MockTransport."""

from decimal import Decimal

import httpx
import pytest

from storefront.infrastructure.currency import AwesomeApiRateSource
from storefront.shared.errors import RateSourceError

URL = "https://rates.test/last/USD-BRL"


def _source(handler, **kwargs) -> AwesomeApiRateSource:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AwesomeApiRateSource(url=URL, client=client, retry_delay_sec=0, **kwargs)


@pytest.mark.asyncio
async def test_bid_is_parsed_as_decimal():
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == URL
        return httpx.Response(200, json={"USDBRL": {"bid": "5.4321", "ask": "5.4400"}})

    source = _source(handler)
    assert await source.fetch_rate() == Decimal("5.4321")


@pytest.mark.asyncio
async def test_non_2xx_is_retried_then_raised():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500, json={"message": "oops"})

    source = _source(handler, retry_attempts=3)
    with pytest.raises(RateSourceError) as exc_info:
        await source.fetch_rate()

    assert exc_info.value.status_code == 500
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_retry_recovers_after_transient_error():
    responses = [httpx.Response(503), httpx.Response(200, json={"USDBRL": {"bid": "5.10"}})]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    source = _source(handler, retry_attempts=2)
    assert await source.fetch_rate() == Decimal("5.10")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [{}, {"USDBRL": {}}, {"USDBRL": {"bid": "abc"}}, {"USDBRL": {"bid": "0"}}, ["USDBRL"]],
)
async def test_malformed_payload_raises(payload):
    source = _source(lambda request: httpx.Response(200, json=payload), retry_attempts=1)
    with pytest.raises(RateSourceError):
        await source.fetch_rate()


@pytest.mark.asyncio
async def test_connection_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    source = _source(handler, retry_attempts=1)
    with pytest.raises(RateSourceError) as exc_info:
        await source.fetch_rate()
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_injected_client_is_not_closed_by_source():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    source = AwesomeApiRateSource(url=URL, client=client)

    await source.close()

    assert client.is_closed is False
    await client.aclose()
