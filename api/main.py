import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import cleanup_dependencies, init_dependencies
from api.error_handlers import register_exception_handlers
from api.routes import currency, invoice, rates
from config.logging import setup_logging
from config.settings import get_settings

settings = get_settings()

setup_logging(settings.LOG_LEVEL, settings.LOG_DIRECTORY)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	logger.info('Starting Dash Rates API...')

	init_dependencies(settings)

	logger.info('Application ready')

	yield

	logger.info('Shutting down...')
	await cleanup_dependencies()


app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)

app.add_middleware(
	CORSMiddleware,
	allow_origins=['*'],
	allow_methods=['*'],
	allow_headers=['*'],
)


@app.middleware('http')
async def log_requests(request: Request, call_next):
	start_time = time.perf_counter()
	response = await call_next(request)
	if request.url.path != '/':
		duration_ms = (time.perf_counter() - start_time) * 1000
		logger.info(
			f'{request.method} {request.url.path} {response.status_code} ({duration_ms:.1f}ms)'
		)
	return response


app.include_router(rates.router)
app.include_router(invoice.router)
# Catch-all selection route, must stay last.
app.include_router(currency.router)

register_exception_handlers(app)


def serve() -> None:
	import uvicorn

	logger.info(f'Starting server on {settings.BIND_ADDRESS}:{settings.PORT}')

	uvicorn.run(
		'api.main:app',
		host=settings.BIND_ADDRESS,
		port=settings.PORT,
		reload=settings.DEBUG,
		log_level=settings.LOG_LEVEL.lower(),
	)


if __name__ == '__main__':
	serve()
