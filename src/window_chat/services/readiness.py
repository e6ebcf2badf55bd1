"""Waiting for the generation backend to come up.

The local AI server may start after the chat does. Callers await
``wait_until_available`` once; it polls the backend under a single
deadline and resolves to a plain bool.
"""

import asyncio
import logging

from window_chat.config import settings
from window_chat.protocols import GenerationBackend

logger = logging.getLogger(__name__)


async def wait_until_available(
    backend: GenerationBackend,
    timeout: float | None = None,
    interval: float | None = None,
) -> bool:
    """Wait for ``backend.is_available()`` to report True.

    Args:
        backend: The backend to probe
        timeout: Seconds to wait before giving up. Defaults to settings.
        interval: Seconds between probes. Defaults to settings.

    Returns:
        True as soon as the backend is available, False on timeout
    """
    timeout = timeout if timeout is not None else settings.readiness_timeout
    interval = interval if interval is not None else settings.readiness_interval

    async def _poll() -> None:
        while not await backend.is_available():
            await asyncio.sleep(interval)

    try:
        await asyncio.wait_for(_poll(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("Backend %s not available after %.1fs", backend.name, timeout)
        return False

    logger.debug("Backend %s is available", backend.name)
    return True
