"""
Wrapper script for running the hub under uvicorn.

Monitoring endpoints are filtered out of the access log.
"""

if __name__ == "__main__":
    import logging

    import uvicorn

    from chat_hub.settings import app_settings
    from chat_hub.uvicorn_filters import ExcludeMetricsFilter

    logging.getLogger("uvicorn.access").addFilter(ExcludeMetricsFilter())

    uvicorn.run(
        "chat_hub:application",
        factory=True,
        host=app_settings.SERVER_HOST,
        port=app_settings.SERVER_PORT,
    )
