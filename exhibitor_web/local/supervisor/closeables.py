import logging
from typing import Any, Iterable, List, Optional

from .errors import CloseFailure

log = logging.getLogger(__name__)


def close_quietly(resource: Any) -> Optional[CloseFailure]:
    """
    Closes a single resource, logging instead of raising on failure.

    :param resource: Any object with a `close()` method, or None.
    :return: The failure if closing raised, otherwise None.
    """
    if resource is None:
        return None
    try:
        resource.close()
        log.debug(f"Closed {resource!r}")
        return None
    except Exception as e:
        log.error(f"Failed to close {resource!r}: {e}", exc_info=True)
        return CloseFailure(resource, e)


def close_all(resources: Iterable[Any]) -> List[CloseFailure]:
    """
    Closes every resource in order. One failure never stops the rest.

    :param resources: The resources to close, in registration order.
    :return: The failures collected along the way.
    """
    failures: List[CloseFailure] = []
    for resource in resources:
        failure = close_quietly(resource)
        if failure is not None:
            failures.append(failure)
    return failures
