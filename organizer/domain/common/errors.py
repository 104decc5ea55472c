from __future__ import annotations


class DomainError(Exception):
    """Base for errors the HTTP layer maps to a client response."""


class ValidationError(DomainError):
    pass


class NotFoundError(DomainError):
    pass
