import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from domain.exceptions.currency import UpstreamFetchError, ValidationError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(ValidationError)
	async def validation_error_handler(request: Request, exc: ValidationError):
		return PlainTextResponse(str(exc), status_code=400)

	@app.exception_handler(UpstreamFetchError)
	async def upstream_error_handler(request: Request, exc: UpstreamFetchError):
		logger.error(f'Upstream error from {exc.provider}: {exc}')
		return JSONResponse(status_code=500, content={'detail': str(exc)})

	@app.exception_handler(Exception)
	async def global_exception_handler(request: Request, exc: Exception):
		logger.error(f'Unhandled exception: {exc}', exc_info=True)
		return JSONResponse(status_code=500, content={'detail': 'Internal server error'})
