import json
import logging
import sys
from datetime import datetime, timezone
from decimal import Decimal
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Keys owned by the formatter; event fields never overwrite them.
_RESERVED = frozenset({'time', 'level', 'logger', 'event', 'error'})


def _json_default(o):
	if isinstance(o, Decimal):
		return str(o)
	if isinstance(o, datetime):
		return o.isoformat()
	raise TypeError(f'Object of type {type(o).__name__} is not JSON serializable')


class EventFormatter(logging.Formatter):
	"""
	One JSON object per line, keyed by event name.

	Event records ('rates', 'invoice', ...) pass their fields as
	``extra={'extra_data': {...}}``; those fields sit at the top level next to
	the event name. Upstream failures also carry the failing provider.
	"""

	def format(self, record: logging.LogRecord) -> str:
		entry = {
			'time': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
			'level': record.levelname,
			'logger': record.name,
			'event': record.getMessage(),
		}

		data = getattr(record, 'extra_data', None) or {}
		entry.update((key, value) for key, value in data.items() if key not in _RESERVED)

		if record.exc_info and record.exc_info[0] is not None:
			exc = record.exc_info[1]
			entry['error'] = {
				'type': record.exc_info[0].__name__,
				'message': str(exc),
				'traceback': self.formatException(record.exc_info),
			}
			provider = getattr(exc, 'provider', None)
			if provider:
				entry['error']['provider'] = provider

		return json.dumps(entry, ensure_ascii=False, default=_json_default)


def setup_logging(
	level: str = 'INFO',
	log_directory: str = '',
	max_file_size: int = 10 * 1024 * 1024,
	backup_count: int = 5,
) -> None:
	"""Configure the root logger: console output plus optional JSON files."""
	root_logger = logging.getLogger()
	root_logger.handlers.clear()
	root_logger.setLevel(logging.DEBUG)

	logging.getLogger('httpx').setLevel(logging.WARNING)

	console_handler = logging.StreamHandler(sys.stdout)
	console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
	console_format = '%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s'
	console_handler.setFormatter(logging.Formatter(console_format, datefmt='%H:%M:%S'))
	root_logger.addHandler(console_handler)

	if not log_directory:
		return

	log_dir = Path(log_directory)
	log_dir.mkdir(parents=True, exist_ok=True)

	file_handler = RotatingFileHandler(
		log_dir / 'app.log',
		maxBytes=max_file_size,
		backupCount=backup_count,
		encoding='utf-8',
	)
	file_handler.setLevel(logging.DEBUG)
	file_handler.setFormatter(EventFormatter())
	root_logger.addHandler(file_handler)
