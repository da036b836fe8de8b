import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from api.dependencies import get_currency_service, get_rate_service
from application.services import CurrencyService, RateService

logger = logging.getLogger(__name__)

router = APIRouter(tags=['currency'])


@router.get(
	'/{selection:path}',
	response_model=dict[str, float],
	status_code=status.HTTP_200_OK,
	summary='Price of 1 DASH in the selected currencies',
)
async def get_converted_rates(
	request: Request,
	currency_service: Annotated[CurrencyService, Depends(get_currency_service)],
	rate_service: Annotated[RateService, Depends(get_rate_service)],
) -> dict[str, float]:
	currencies = currency_service.parse_selection(request.url.path)
	rates = await rate_service.get_rates(currencies)
	prices = {code: float(rate) for code, rate in rates.items()}

	logger.info(
		'rates',
		extra={
			'extra_data': {
				'remote_ip': request.client.host if request.client else None,
				'rates': prices,
			}
		},
	)
	return prices
