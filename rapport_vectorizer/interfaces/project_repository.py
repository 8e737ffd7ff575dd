"""Abstract base class for the relational project-record store.

Each invocation ends with exactly one terminal update of the project row:
either :meth:`IProjectRepository.mark_processed` on success or
:meth:`IProjectRepository.clear_processing` on failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: PostgresProjectRepository
# Located in: rapport_vectorizer/providers/database/
class IProjectRepository(ABC):
    """Contract for updating the project row that owns a report."""

    @abstractmethod
    async def mark_processed(
        self,
        project_id: str,
        technologies: list[str],
        resume: str,
    ) -> None:
        """Set technologies and resume, and clear the processing flag.

        Raises
        ------
        rapport_vectorizer.utils.errors.DatabaseError
            If the update statement fails.
        """

    @abstractmethod
    async def clear_processing(self, project_id: str) -> None:
        """Clear only the processing flag (failure path).

        Raises
        ------
        rapport_vectorizer.utils.errors.DatabaseError
            If the update statement fails.
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the connection pool.  Safe to call more than once."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier (e.g. ``"postgres"``)."""
