"""
Programme Repository Interface (Port).

This module defines the abstract interface for reading programme runs and
their immutable snapshots.
"""
from typing import Protocol, Optional

from domain.models import Programme, ProgrammeSnapshot


class ProgrammeRepository(Protocol):
    """
    Abstract interface for programme lookups.

    The snapshot returned here must be the frozen copy captured when the
    programme started, never the live plan.
    """

    def get_programme(self, programme_id: str) -> Optional[Programme]:
        """
        Get a programme run by ID.

        Args:
            programme_id: Programme UUID

        Returns:
            Programme or None if not found
        """
        ...

    def get_immutable_snapshot(self, programme_id: str) -> Optional[ProgrammeSnapshot]:
        """
        Get the snapshot captured when the programme was started.

        Args:
            programme_id: Programme UUID

        Returns:
            ProgrammeSnapshot or None if the programme has none
        """
        ...
