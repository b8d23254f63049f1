"""
Fan-out/fan-in resolution of a whole platform catalog.

Every platform is resolved on its own worker thread. The batch waits for
all of them and builds the icon map in catalog order, whatever order the
workers finish in.
"""

from concurrent.futures import ThreadPoolExecutor, wait
from typing import Dict, Optional, Sequence

from .logger import get_logger
from .probe import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, DEFAULT_VARIANTS, resolve_platform


def resolve_all(
    platforms: Sequence[str],
    base_url: str = DEFAULT_BASE_URL,
    variants: Sequence[str] = DEFAULT_VARIANTS,
    timeout: float = DEFAULT_TIMEOUT,
    session=None,
    resolver=resolve_platform,
) -> Dict[str, Optional[str]]:
    """
    Resolve the icon variant of every platform concurrently.

    Args:
        platforms: Ordered platform identifiers
        base_url: Icon host base URL
        variants: Extensions to try, in priority order
        timeout: Per-check timeout in seconds
        session: Optional requests-compatible session used for HEAD checks
        resolver: Callable resolving one platform (see resolve_platform)

    Returns:
        Dict with exactly one entry per platform, in input order. Values are
        the resolved variant, or None when unresolved.
    """
    logger = get_logger()
    platforms = list(platforms)
    if not platforms:
        return {}

    logger.info(
        "Resolving platform icons",
        platforms=len(platforms),
        variants=list(variants),
        timeout=timeout,
    )

    # One worker per platform: no limit beyond the catalog size
    with ThreadPoolExecutor(max_workers=len(platforms), thread_name_prefix="iconmap") as executor:
        futures = [
            executor.submit(
                resolver,
                platform,
                base_url=base_url,
                variants=variants,
                timeout=timeout,
                session=session,
            )
            for platform in platforms
        ]
        wait(futures)

    icon_map: Dict[str, Optional[str]] = {}
    for platform, future in zip(platforms, futures):
        # SystemExit from a worker is one platform's fault; KeyboardInterrupt still propagates
        try:
            icon_map[platform] = future.result()
        except (Exception, SystemExit) as e:
            logger.error("Platform resolution failed", platform=platform, error=repr(e))
            icon_map[platform] = None

    resolved = sum(1 for v in icon_map.values() if v is not None)
    logger.info(f"Resolved {resolved}/{len(icon_map)} platform icons")
    return icon_map
