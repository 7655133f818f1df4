from .recorder import AuditRecorder, Operation

__all__ = ["AuditRecorder", "Operation"]
