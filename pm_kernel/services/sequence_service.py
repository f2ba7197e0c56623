"""
SequenceService -- monotonic identity allocation via locked counter rows.

Responsibility:
    Hands out strictly increasing integers for named sequences (project IDs,
    task IDs).  A dedicated counter table with row-level locking
    (``SELECT ... FOR UPDATE``) serializes concurrent allocations, so two
    simultaneous creations can never compute the same next identity.

Invariants enforced:
    - A value is never handed out twice for the same sequence name.
    - A freshly created counter is seeded from the caller-supplied floor
      (typically the highest identity already stored), so allocation stays
      above rows that predate the counter.
    - The increment is only visible once the caller's transaction commits.

Failure modes:
    - IntegrityError on concurrent counter creation is absorbed by a
      savepoint rollback and a re-read of the winning row.
    - SequenceError when the seed callable returns a negative floor.
"""

from collections.abc import Callable

from sqlalchemy import BigInteger, String, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Mapped, Session, mapped_column

from pm_kernel.db.base import Base
from pm_kernel.exceptions import SequenceError
from pm_kernel.logging_config import get_logger

logger = get_logger("services.sequence")


class SequenceCounter(Base):
    """One row per named sequence holding the last value handed out."""

    __tablename__ = "sequence_counters"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    current_value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


class SequenceService:
    """
    Transactional sequence numbers.

    Non-goals:
        - Does NOT call ``session.commit()``; the caller controls boundaries.

    Usage:
        seq = SequenceService(session)
        next_id = seq.next_value("project", seed_from=lambda: highest_project_id)
    """

    PROJECT = "project"
    PROJECT_TASK = "project_task"

    def __init__(self, session: Session):
        self._session = session

    def _locked_counter(self, sequence_name: str) -> SequenceCounter | None:
        return self._session.execute(
            select(SequenceCounter)
            .where(SequenceCounter.name == sequence_name)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def next_value(
        self,
        sequence_name: str,
        seed_from: Callable[[], int] | None = None,
    ) -> int:
        """
        Allocate the next value for a named sequence.

        Args:
            sequence_name: Name of the sequence.
            seed_from: Called once, when the counter row does not exist yet,
                to obtain the floor the sequence must start above.

        Returns:
            A value strictly greater than every value previously returned
            for ``sequence_name`` (always > 0).
        """
        counter = self._locked_counter(sequence_name)

        if counter is None:
            floor = seed_from() if seed_from is not None else 0
            if floor < 0:
                raise SequenceError(sequence_name, f"negative seed {floor}")

            savepoint = self._session.begin_nested()
            try:
                counter = SequenceCounter(name=sequence_name, current_value=floor + 1)
                self._session.add(counter)
                self._session.flush()
                savepoint.commit()
                logger.debug(
                    "sequence_allocated",
                    extra={"sequence_name": sequence_name, "value": counter.current_value},
                )
                return counter.current_value
            except IntegrityError:
                logger.debug(
                    "sequence_counter_race_retry",
                    extra={"sequence_name": sequence_name},
                )
                savepoint.rollback()
                counter = self._locked_counter(sequence_name)
                if counter is None:
                    raise

        counter.current_value += 1
        self._session.flush()
        logger.debug(
            "sequence_allocated",
            extra={"sequence_name": sequence_name, "value": counter.current_value},
        )
        return counter.current_value

    def current_value(self, sequence_name: str) -> int | None:
        """Last value handed out for the sequence, or None if never used."""
        return self._session.execute(
            select(SequenceCounter.current_value).where(
                SequenceCounter.name == sequence_name
            )
        ).scalar_one_or_none()
