"""Typed application errors.

Every error the service raises on purpose derives from ``AppException`` so
the API layer can map it to a status code without inspecting messages.
"""

from typing import Optional


class AppException(Exception):
    """Base application exception carrying an HTTP status and detail."""

    status_code: int = 500

    def __init__(self, detail: str, status_code: Optional[int] = None):
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(detail)


class CatalogueNotFoundError(AppException):
    """The requested catalogue does not exist."""

    status_code = 404

    def __init__(self, catalogue_id: str):
        self.catalogue_id = catalogue_id
        super().__init__(f"Catalogue {catalogue_id} not found")


class DataSourceError(AppException):
    """A collaborator failed to return data the analysis cannot do without."""

    status_code = 503
