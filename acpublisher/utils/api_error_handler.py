"""
Reusable decorator for translating ``requests`` failures.

Network-facing methods of the API client and the binary transfer are wrapped
with this decorator so that every low-level failure surfaces as one of the
publisher exceptions, with the endpoint and the original exception attached.
"""

import functools
import inspect
import logging
from typing import Callable, Optional, Type

import requests

from .exceptions import PublisherError


def handle_transport_errors(
    error_class: Type[PublisherError],
    action: str,
    context_arg: Optional[str] = None,
):
    """
    Decorator that converts transport failures into publisher exceptions.

    Usage:
        @handle_transport_errors(TransportError, "reach App Center", context_arg="endpoint")
        def exchange(self, method, endpoint, expected_status, body=None):
            ...

    Args:
        error_class: Publisher exception raised in place of the original failure
        action: Short description used in the message ("Failed to <action>")
        context_arg: Name of the wrapped function's argument identifying the
            endpoint, attached to the raised exception

    Publisher exceptions raised by the wrapped function pass through unchanged.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            logger = getattr(self, "logger", logging.getLogger(func.__name__))
            endpoint = _extract_context(signature, self, args, kwargs, context_arg)

            try:
                return func(self, *args, **kwargs)

            except PublisherError:
                raise

            except requests.exceptions.Timeout as e:
                _raise(error_class, f"Timeout while trying to {action}", endpoint, e, logger)

            except requests.exceptions.ConnectionError as e:
                _raise(error_class, f"Connection failed while trying to {action}", endpoint, e, logger)

            # RequestException derives from OSError, so it must come first
            except requests.exceptions.RequestException as e:
                _raise(error_class, f"Failed to {action}", endpoint, e, logger)

            except OSError as e:
                _raise(error_class, f"I/O error while trying to {action}", endpoint, e, logger)

        return wrapper

    return decorator


def _extract_context(signature, instance, args: tuple, kwargs: dict, context_arg: Optional[str]) -> Optional[str]:
    """Return the value of ``context_arg`` from the call, if it can be bound."""
    if not context_arg:
        return None
    try:
        bound = signature.bind_partial(instance, *args, **kwargs)
    except TypeError:
        return None
    value = bound.arguments.get(context_arg)
    return str(value) if value is not None else None


def _raise(error_class, message: str, endpoint: Optional[str], original: Exception, logger: logging.Logger):
    logger.debug(f"{message} ({endpoint or 'unknown endpoint'}): {original!r}")
    raise error_class(
        f"{message}: {original}",
        endpoint=endpoint,
        original_exception=original
    ) from original


__all__ = ["handle_transport_errors"]
