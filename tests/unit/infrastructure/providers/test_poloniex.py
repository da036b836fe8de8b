# nosec B101


from decimal import Decimal

import pytest

from domain.exceptions.currency import UpstreamFetchError
from infrastructure.providers import PoloniexProvider


@pytest.mark.asyncio
async def test_fetch_rate_averages_all_trades(cache, notifier, make_client):
    trades = [
        {"globalTradeID": 1, "type": "buy", "rate": "0.01000000", "amount": "1.5"},
        {"globalTradeID": 2, "type": "sell", "rate": "0.02000000", "amount": "0.3"},
        {"globalTradeID": 3, "type": "buy", "rate": "0.03000000", "amount": "2.0"},
    ]
    mock_client = make_client(trades)
    provider = PoloniexProvider(cache=cache, notifier=notifier, client=mock_client)

    rate = await provider.fetch_rate()

    assert rate == Decimal("0.02")
    url = mock_client.get.call_args[0][0]
    assert "command=returnTradeHistory" in url
    assert "currencyPair=BTC_DASH" in url


@pytest.mark.asyncio
async def test_fetch_rate_uses_every_returned_trade(cache, notifier, make_client):
    trades = [{"rate": "0.01"}] * 199 + [{"rate": "0.21"}]
    provider = PoloniexProvider(cache=cache, notifier=notifier, client=make_client(trades))

    assert await provider.fetch_rate() == Decimal("0.011")


@pytest.mark.asyncio
async def test_zero_trades_is_a_failure_not_a_zero_rate(cache, notifier, make_client):
    provider = PoloniexProvider(cache=cache, notifier=notifier, client=make_client([]))

    with pytest.raises(UpstreamFetchError) as exc_info:
        await provider.fetch_rate()

    assert "no trades" in str(exc_info.value)
    notifier.notify.assert_called_once()
    assert await cache.get_rate(PoloniexProvider.URL) is None


@pytest.mark.asyncio
async def test_error_object_instead_of_trades(cache, notifier, make_client):
    provider = PoloniexProvider(
        cache=cache, notifier=notifier, client=make_client({"error": "Invalid currency pair."})
    )

    with pytest.raises(UpstreamFetchError):
        await provider.fetch_rate()


@pytest.mark.asyncio
async def test_trade_without_rate(cache, notifier, make_client):
    provider = PoloniexProvider(
        cache=cache, notifier=notifier, client=make_client([{"rate": "0.01"}, {"amount": "2"}])
    )

    with pytest.raises(UpstreamFetchError) as exc_info:
        await provider.fetch_rate()

    assert "without a rate" in str(exc_info.value)
