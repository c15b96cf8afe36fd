"""Errors raised by collaborator adapters."""

from __future__ import annotations


class TransientAdapterError(RuntimeError):
    """A remote probe could not give an answer (timeout, connectivity, bad payload).

    Resolvers record the probe as indeterminate for the current run and treat
    it as absent; nothing is retried.
    """

    def __init__(self, message: str, *, service: str | None = None) -> None:
        super().__init__(message)
        self.service = service
