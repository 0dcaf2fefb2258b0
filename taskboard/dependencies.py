from typing import Annotated, Optional

from fastapi import Depends, Header

from .config import get_settings
from .errors import ValidationError
from .utils.time import deadline_from_timeout


def get_deadline(x_request_timeout: Annotated[Optional[float], Header()] = None) -> float:
    """Monotonic deadline for this request, from ``X-Request-Timeout`` or the configured default."""
    if x_request_timeout is not None and x_request_timeout <= 0:
        raise ValidationError("X-Request-Timeout must be a positive number of seconds")
    timeout = x_request_timeout if x_request_timeout is not None else get_settings().request_timeout_seconds
    return deadline_from_timeout(timeout)


deadline_dependency = Annotated[float, Depends(get_deadline)]
