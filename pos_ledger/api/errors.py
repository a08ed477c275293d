"""
Translation of ledger errors into HTTP errors.
"""

from fastapi import HTTPException

from pos_ledger.errors import ConfigurationError, NotFoundError


def to_http_exception(error: ValueError) -> HTTPException:
    """
    NotFoundError -> 404, ConfigurationError -> 500,
    any other ValueError -> 400.
    """
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, ConfigurationError):
        return HTTPException(status_code=500, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))
