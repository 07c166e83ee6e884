"""Helper modules for the socket printer."""

__all__ = [
    "estimator",
]
