from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies import get_invoice_service
from application.services import InvoiceService

router = APIRouter(tags=['invoice'])


@router.get(
	'/invoice',
	response_model=str,
	status_code=status.HTTP_200_OK,
	summary='Create a CoinTigo invoice',
)
async def create_invoice(
	request: Request,
	service: Annotated[InvoiceService, Depends(get_invoice_service)],
	addr: Annotated[str, Query(description='Receiving DASH address')] = '',
	amount: Annotated[str, Query(description='Invoice amount')] = '',
) -> str:
	remote_ip = request.client.host if request.client else None
	return await service.create_invoice(addr, amount, remote_ip=remote_ip)
