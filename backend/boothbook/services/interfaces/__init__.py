"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .store import ReservationStore

__all__ = ['ReservationStore']
