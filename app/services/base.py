from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import status

from app.exceptions.exceptions import DomainError, RepositoryError, ServiceError, ValidationError

logger = logging.getLogger(__name__)


@contextmanager
def service_operation(action: str) -> Iterator[None]:
    """Apply the service error policy to the wrapped block.

    Domain errors keep their kind; a repository failure that was not remapped to
    a specific status and any unexpected exception become a ServiceError. The
    client only sees which action failed; the underlying detail is logged.
    """
    try:
        yield
    except RepositoryError as exc:
        if exc.status_code != status.HTTP_500_INTERNAL_SERVER_ERROR:
            raise
        logger.error("Service operation failed: %s", exc.message, exc_info=exc, extra={"action": action})
        raise ServiceError(f"Failed to {action}.") from exc
    except DomainError:
        raise
    except Exception as exc:
        logger.error("Unexpected failure in service operation: %r", exc, exc_info=exc, extra={"action": action})
        raise ServiceError(f"Failed to {action}.") from exc


def require_fields(entity: str, **values: str | None) -> None:
    missing = [name for name, value in values.items() if value is None or not str(value).strip()]
    if missing:
        raise ValidationError(f"All fields ({', '.join(values)}) are required for {entity}. Missing: {', '.join(missing)}.")
