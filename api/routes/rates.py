from typing import Annotated

from fastapi import APIRouter, Depends, status

from api.dependencies import get_rate_service
from api.schemas import EndpointDescription, IndexResponse
from application.services import RateService
from config.settings import Settings, get_settings

router = APIRouter(tags=['rates'])

ENDPOINTS = [
	EndpointDescription(path='/avg', description='Average DASH/BTC rate across exchanges (CryptoCompare)'),
	EndpointDescription(path='/poloniex', description='Average DASH/BTC rate over recent Poloniex trades'),
	EndpointDescription(path='/btcaverage', description='Current DASH/BTC rate from BitcoinAverage'),
	EndpointDescription(path='/invoice?addr=&amount=', description='Create a CoinTigo invoice'),
	EndpointDescription(path='/{code}[/{code}...]', description='Price of 1 DASH in each currency'),
	EndpointDescription(path='/LIST', description='Price of 1 DASH in every supported currency'),
]


@router.get('/', response_model=IndexResponse, summary='API index')
async def index(settings: Annotated[Settings, Depends(get_settings)]) -> IndexResponse:
	return IndexResponse(name=settings.APP_NAME, host=settings.HOST, endpoints=ENDPOINTS)


@router.get(
	'/avg',
	response_model=float,
	status_code=status.HTTP_200_OK,
	summary='Cross-exchange DASH/BTC average',
)
async def get_average_rate(service: Annotated[RateService, Depends(get_rate_service)]) -> float:
	return float(await service.get_provider_rate('cryptocompare'))


@router.get(
	'/poloniex',
	response_model=float,
	status_code=status.HTTP_200_OK,
	summary='Poloniex DASH/BTC trade average',
)
async def get_poloniex_rate(service: Annotated[RateService, Depends(get_rate_service)]) -> float:
	return float(await service.get_provider_rate('poloniex'))


@router.get(
	'/btcaverage',
	response_model=float,
	status_code=status.HTTP_200_OK,
	summary='Current DASH/BTC rate',
)
async def get_btcaverage_rate(service: Annotated[RateService, Depends(get_rate_service)]) -> float:
	return float(await service.get_provider_rate('bitcoinaverage'))
