from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_currency_service, get_invoice_service, get_rate_service
from api.main import app
from application.services import CurrencyService, InvoiceService
from domain.exceptions.currency import UpstreamFetchError
from domain.models.currency import SUPPORTED_CURRENCIES
from infrastructure.invoices.cointigo import CoinTigoInvoiceClient


@pytest.fixture
def mock_rate_service():
    mock_service = MagicMock()
    mock_service.get_rates = AsyncMock(
        return_value={'USD': Decimal('500.00'), 'EUR': Decimal('460.00')}
    )
    mock_service.get_provider_rate = AsyncMock(return_value=Decimal('0.0123'))
    return mock_service


@pytest.fixture
def mock_invoice_client():
    mock_client = AsyncMock(spec=CoinTigoInvoiceClient)
    mock_client.create_invoice.return_value = 'inv-42'
    return mock_client


@pytest.fixture
def client(mock_rate_service, mock_invoice_client):
    app.dependency_overrides[get_rate_service] = lambda: mock_rate_service
    app.dependency_overrides[get_currency_service] = lambda: CurrencyService()
    app.dependency_overrides[get_invoice_service] = lambda: InvoiceService(client=mock_invoice_client)
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


# ============================================================================
# Currency selection
# ============================================================================

def test_selected_rates_success(client, mock_rate_service):
    response = client.get('/USD/EUR')

    assert response.status_code == 200
    assert response.json() == {'USD': 500, 'EUR': 460}
    mock_rate_service.get_rates.assert_awaited_once_with(['USD', 'EUR'])


def test_lowercase_selection_with_trailing_slash(client, mock_rate_service):
    response = client.get('/usd/eur/')

    assert response.status_code == 200
    mock_rate_service.get_rates.assert_awaited_once_with(['USD', 'EUR'])


def test_list_requests_every_supported_currency(client, mock_rate_service):
    response = client.get('/LIST')

    assert response.status_code == 200
    mock_rate_service.get_rates.assert_awaited_once_with(list(SUPPORTED_CURRENCIES))


def test_unsupported_currency_is_400_plain_text(client, mock_rate_service):
    response = client.get('/USD/XXX')

    assert response.status_code == 400
    assert response.headers['content-type'].startswith('text/plain')
    assert response.text == 'Unsupported currency selection in url'
    mock_rate_service.get_rates.assert_not_called()


def test_malformed_selection_is_400(client):
    response = client.get('/US-D')

    assert response.status_code == 400
    assert response.text == 'Malformed currency selection in url'


def test_upstream_failure_is_500(client, mock_rate_service):
    mock_rate_service.get_rates.side_effect = UpstreamFetchError(
        'bitcoinaverage-global', 'bitcoinaverage-global: HTTP error 502: Bad Gateway'
    )

    response = client.get('/USD')

    assert response.status_code == 500
    assert 'bitcoinaverage-global' in response.json()['detail']


# ============================================================================
# Single provider endpoints
# ============================================================================

@pytest.mark.parametrize(
    'path, provider',
    [('/avg', 'cryptocompare'), ('/poloniex', 'poloniex'), ('/btcaverage', 'bitcoinaverage')],
)
def test_provider_endpoints(client, mock_rate_service, path, provider):
    response = client.get(path)

    assert response.status_code == 200
    assert response.json() == 0.0123
    mock_rate_service.get_provider_rate.assert_awaited_once_with(provider)


def test_poloniex_without_trades_is_500(client, mock_rate_service):
    mock_rate_service.get_provider_rate.side_effect = UpstreamFetchError(
        'poloniex', 'poloniex: no trades returned'
    )

    response = client.get('/poloniex')

    assert response.status_code == 500
    assert response.json() == {'detail': 'poloniex: no trades returned'}


# ============================================================================
# Index and invoice
# ============================================================================

def test_index_describes_api(client, mock_rate_service):
    response = client.get('/')

    assert response.status_code == 200
    data = response.json()
    assert data['host']
    assert '/avg' in [endpoint['path'] for endpoint in data['endpoints']]
    mock_rate_service.get_rates.assert_not_called()


def test_invoice_success(client, mock_invoice_client):
    response = client.get('/invoice', params={'addr': 'Xaddr', 'amount': '2500'})

    assert response.status_code == 200
    assert response.json() == 'inv-42'
    mock_invoice_client.create_invoice.assert_awaited_once_with('Xaddr', 2500)


@pytest.mark.parametrize('amount', ['abc', '0', ''])
def test_invoice_invalid_amount_is_400(client, mock_invoice_client, amount):
    response = client.get('/invoice', params={'addr': 'Xaddr', 'amount': amount})

    assert response.status_code == 400
    assert response.text == 'Amount param is invalid'
    mock_invoice_client.create_invoice.assert_not_called()


def test_serve_runs_the_app_under_uvicorn(monkeypatch):
    import uvicorn

    from api import main

    run = MagicMock()
    monkeypatch.setattr(uvicorn, 'run', run)

    main.serve()

    run.assert_called_once()
    args, kwargs = run.call_args
    assert args == ('api.main:app',)
    assert kwargs['host'] == main.settings.BIND_ADDRESS
    assert kwargs['port'] == main.settings.PORT
