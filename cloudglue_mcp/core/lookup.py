"""Tagged outcomes for reuse lookups.

A lookup either finds something (``Found``), finds nothing (``Miss``) or
fails while talking to the platform (``TransientError``). The resolver
treats the last two the same way; they are kept apart so logs show which
one happened.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

from loguru import logger

from ..exceptions import CloudglueMCPException


@dataclass(frozen=True)
class Found:
    value: Any


@dataclass(frozen=True)
class Miss:
    reason: str = ""


@dataclass(frozen=True)
class TransientError:
    error: Exception


LookupOutcome = Union[Found, Miss, TransientError]


async def run_lookup(step: str, lookup: Callable[[], Awaitable[Optional[Any]]]) -> LookupOutcome:
    """Run ``lookup`` and tag its result.

    ``lookup`` returns the reusable value, or None (or a ``Miss``) when nothing fits. Platform errors
    become ``TransientError``; anything else propagates.
    """
    try:
        value = await lookup()
    except CloudglueMCPException as e:
        logger.warning(f"{step} lookup failed, treating as a miss: {e}")
        return TransientError(e)

    if isinstance(value, Miss):
        logger.debug(f"{step} lookup missed: {value.reason}")
        return value
    if value is None:
        logger.debug(f"{step} lookup found nothing")
        return Miss(f"{step}: nothing reusable")
    return Found(value)
