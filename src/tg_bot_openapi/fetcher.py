"""Downloads the Bot API reference page."""

import logging

import requests

from tg_bot_openapi.config import Settings

logger = logging.getLogger(__name__)


def fetch_document(settings: Settings, url: str | None = None) -> str:
    """Fetch the raw HTML of the documentation page.

    Network errors propagate as ``requests.RequestException``.
    """
    url = url or settings.doc_url
    proxies = None
    if settings.proxy:
        logger.info("Using proxy %s", settings.proxy)
        proxies = {"http": settings.proxy, "https": settings.proxy}

    logger.info("Fetching %s", url)
    response = requests.get(
        url,
        proxies=proxies,
        timeout=settings.timeout,
        verify=settings.verify_ssl,
    )
    response.raise_for_status()
    response.encoding = "utf-8"
    return response.text
