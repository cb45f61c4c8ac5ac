import logging
import traceback

import backoff

logger = logging.getLogger(__name__)


def _log_retry(details):
    logger.warning(
        f"Exchange with the device failed, retrying from a fresh connection "
        f"(attempt {details['tries']}). Traceback: {traceback.format_exc()}"
    )


def retry_on_exception(expected_exception, retries: int, **backoff_kwargs):
    """ When used as a decorator, when the wrapped function raises expected_exception, call it again
    from scratch, up to `retries` more times with a constant interval in between. Once retries are
    exhausted the last error is raised.

    The device has no recovery handshake, so the wrapped function must redo a whole exchange
    (reopening the port) rather than resume one.

    Example usage:
    >>> @retry_on_exception(TransportError, retries=2)
    >>> def read_from_device(user): ...

    Args:
        expected_exception: exception or tuple of exceptions to handle via retry
        retries: number of additional attempts after the first. 0 disables retrying.
        **backoff_kwargs: Additional keyword arguments will be passed to `backoff.on_exception`.

    Returns:
        decorator which can be used to wrap a function
    """
    return backoff.on_exception(
        backoff.constant,
        expected_exception,
        **{
            "interval": 2,  # give the device time to drop back to idle
            "jitter": None,
            "max_tries": retries + 1,
            "on_backoff": _log_retry,
            **backoff_kwargs,
        },
    )
