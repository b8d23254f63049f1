"""Existence checks for platform icons on the icon host."""

import time
from typing import List, Optional, Sequence, Tuple
from urllib.parse import urljoin

import requests

from .logger import get_logger

DEFAULT_BASE_URL = "https://icons.llama.fi"
DEFAULT_VARIANTS = ("jpg", "png")
DEFAULT_TIMEOUT = 10.0

# Same hop limit requests uses when it follows redirects itself
MAX_REDIRECTS = 30
REDIRECT_STATUSES = (301, 302, 303, 307, 308)


def candidate_urls(
    platform: str,
    base_url: str = DEFAULT_BASE_URL,
    variants: Sequence[str] = DEFAULT_VARIANTS,
) -> List[Tuple[str, str]]:
    """Return (variant, url) pairs for a platform in priority order."""
    base = base_url.rstrip("/")
    return [(variant, f"{base}/{platform}.{variant}") for variant in variants]


def check_exists(url: str, timeout: float = DEFAULT_TIMEOUT, session=None) -> bool:
    """Issue a HEAD request and report whether the resource exists.

    ``timeout`` bounds the whole check, redirects included: every hop only
    gets the time left before the deadline. Only a final 2xx status counts
    as present. Non-2xx responses, timeouts and transport errors are all
    reported as absent; nothing is raised.
    """
    logger = get_logger()
    http = session or requests
    logger.record_check_attempt()
    deadline = time.monotonic() + timeout
    current = url
    try:
        for _ in range(MAX_REDIRECTS + 1):
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise requests.exceptions.Timeout(f"Deadline exceeded before HEAD {current}")
            resp = http.head(current, timeout=remaining, allow_redirects=False)
            location = resp.headers.get("Location") if resp.status_code in REDIRECT_STATUSES else None
            if not location:
                break
            current = urljoin(current, location)
        else:
            raise requests.exceptions.TooManyRedirects(f"Exceeded {MAX_REDIRECTS} redirects")
    except requests.exceptions.Timeout:
        logger.record_check_not_found("Timeout")
        logger.warning("Icon check timed out", url=url, timeout=timeout)
        return False
    except requests.exceptions.RequestException as e:
        logger.record_check_not_found("RequestException")
        logger.warning("Icon check failed", url=url, error=str(e))
        return False

    if 200 <= resp.status_code < 300:
        logger.record_check_found()
        return True
    if resp.status_code == 404:
        logger.record_check_not_found()
    else:
        logger.record_check_not_found(f"HTTP_{resp.status_code}")
    logger.debug("Icon not available", url=url, status=resp.status_code)
    return False


def resolve_platform(
    platform: str,
    base_url: str = DEFAULT_BASE_URL,
    variants: Sequence[str] = DEFAULT_VARIANTS,
    timeout: float = DEFAULT_TIMEOUT,
    session=None,
) -> Optional[str]:
    """Return the first icon variant that exists for ``platform``.

    Candidates are checked one at a time in ``variants`` order and the
    search stops at the first hit. Each check gets its own ``timeout``.
    Returns None when no candidate exists or every check failed.
    """
    logger = get_logger()
    for variant, url in candidate_urls(platform, base_url, variants):
        if check_exists(url, timeout=timeout, session=session):
            logger.record_variant_found(variant)
            logger.record_resolution(True)
            logger.debug("Icon resolved", platform=platform, variant=variant)
            return variant

    logger.record_resolution(False)
    logger.info("No icon found", platform=platform)
    return None
