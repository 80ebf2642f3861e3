import asyncio
import functools
from typing import TypeVar, Callable, Any, Type, Union
from loguru import logger
from ..exceptions import CloudglueMCPException

T = TypeVar('T')


def handle_exceptions(
    retries: int = 3,
    fallback: Any = None,
    exceptions: Union[Type[Exception], tuple] = Exception,
    backoff_factor: float = 2.0,
    max_delay: float = 60.0
):
    """
    Decorator to retry an async callable with exponential backoff.

    Args:
        retries: Number of attempts
        fallback: Value to return if every attempt fails (re-raise when None)
        exceptions: Exception types that trigger a retry
        backoff_factor: Exponential backoff factor
        max_delay: Maximum delay between retries
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            last_exception = None

            for attempt in range(retries):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e

                    if attempt < retries - 1:
                        delay = min(backoff_factor ** attempt, max_delay)
                        logger.warning(f"Attempt {attempt + 1} failed: {e}. Retrying in {delay}s...")
                        await asyncio.sleep(delay)
                    else:
                        logger.error(f"All {retries} attempts failed: {e}")

            if fallback is not None:
                logger.info(f"Returning fallback value: {fallback}")
                return fallback

            raise last_exception

        return wrapper

    return decorator


def convert_exceptions(exception_map: dict):
    """
    Decorator to convert third-party exceptions into CloudglueMCPException subclasses.

    Exceptions that already belong to the hierarchy pass through untouched.

    Args:
        exception_map: Dictionary mapping exception types to target exception types
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except CloudglueMCPException:
                raise
            except Exception as e:
                for source_exc, target_exc in exception_map.items():
                    if isinstance(e, source_exc):
                        raise target_exc(str(e) or type(e).__name__, details={"original_exception": type(e).__name__}) from e
                raise

        return wrapper

    return decorator


def describe_error(error: Exception) -> str:
    """Human readable message for an exception surfaced in a tool envelope."""
    message = str(error)
    return message if message else type(error).__name__
