"""Custom filters for uvicorn access logging."""

import logging

from chat_hub.settings import app_settings


class ExcludeMetricsFilter(logging.Filter):
    """
    Logging filter to exclude monitoring endpoint requests from access logs.

    Requests to /metrics and /health are frequent scrape/probe traffic and
    would drown out chat connection logs. The excluded paths are configurable
    via the LOG_EXCLUDED_PATHS setting.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        return not any(
            path in message for path in app_settings.LOG_EXCLUDED_PATHS
        )
