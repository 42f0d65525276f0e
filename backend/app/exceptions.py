"""
Notas Backend - Custom Exception Hierarchy
===========================================

What:  Defines application-specific exceptions for the two failure kinds.
Why:   Custom exceptions let the global handlers pick the HTTP status code
       and the fixed plain-text message without try/except in every route.
How:   Each exception class carries a message and optional context dict.
       Handlers registered in main.py turn them into text/plain responses.
Who:   Raised by services and routes; caught by global handlers.

Exception Hierarchy:
    NotasError (base)
    ├── PolicyRejection  → 403 Forbidden (time window closed or note cap reached)
    └── DatabaseError    → 500 Internal Server Error (store failure)
"""

from typing import Any, Dict, Optional


class NotasError(Exception):
    """
    Base exception for all Notas application errors.

    Attributes:
        message:  User-facing text returned as the response body
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "Erro interno do servidor",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class PolicyRejection(NotasError):
    """
    Raised when the access policy refuses a request.

    When:    The request arrives outside the opening hours, or the add form is
             requested while the note cap is reached.
    HTTP:    403 Forbidden

    Rejections are expected outcomes, so they are logged at INFO, not ERROR.
    """

    def __init__(
        self,
        message: str,
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if reason:
            ctx["reason"] = reason
        super().__init__(message=message, context=ctx)
        self.reason = reason


class DatabaseError(NotasError):
    """
    Raised when reading or writing the note store fails.

    HTTP:    500 Internal Server Error

    The message is the fixed, operation-specific text shown to the user
    (e.g. "Erro ao adicionar nota"). The underlying driver error only goes
    to the server log through `context`. Nothing is retried.
    """

    def __init__(
        self,
        message: str = "Erro ao acessar o banco de dados",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
