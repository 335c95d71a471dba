"""
Analysis error handling utilities.

Provides a decorator that maps domain exceptions onto HTTP responses for
analysis endpoints.

Dependencies: fastapi, pydantic, speaker_companion.core.exceptions
System role: Domain error -> HTTP status translation
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from pydantic import ValidationError

from speaker_companion.core.exceptions import (
    AnalysisNotFoundError,
    InvalidTransitionError,
    RemoteServiceError,
)
from speaker_companion.core.exceptions import ValidationError as DomainValidationError

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_analysis_errors(func: F) -> F:
    """
    Decorator to handle analysis errors and transform them into HTTPExceptions.

    Mapping:
    - AnalysisNotFoundError -> 404
    - InvalidConfigError / InvalidArgumentError -> 400
    - InvalidTransitionError -> 409
    - RemoteServiceError -> 502
    - pydantic ValidationError -> 422
    - anything else -> 500
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except AnalysisNotFoundError as e:
            logger.warning(
                "Analysis not found",
                extra={"analysis_id": str(e.analysis_id)}
            )
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=e.message
            )

        except DomainValidationError as e:
            logger.warning(
                "Invalid analysis request",
                extra={"field": e.field, "error": e.message}
            )
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=e.message
            )

        except InvalidTransitionError as e:
            logger.warning("Rejected stage transition", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=e.message
            )

        except RemoteServiceError as e:
            logger.error(
                "Remote analysis service failed",
                extra={"status_code": e.status_code, "error": e.message}
            )
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=e.message
            )

        except ValidationError as e:
            logger.warning("Pydantic validation error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors(include_url=False)
            )

        except Exception as e:
            logger.exception(
                "Unexpected failure in analysis operation",
                extra={"error": str(e)}
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred during analysis operation"
            )

    return wrapper  # type: ignore
