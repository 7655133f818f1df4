"""
Failure types shared by the persistence layer.

"Not found" is not an exception here: mutating repository calls report it
as zero rows affected and the routers turn that into a 404.
"""

from __future__ import annotations


# Store failures are explicit and separable from other runtime errors.
class BackendError(RuntimeError):
    pass


class AuditWriteFailure(BackendError):
    """The audit insert failed; the enclosing transaction is rolled back."""


class NotPersisted(BackendError):
    """An insert completed without returning the new row's identifier."""
