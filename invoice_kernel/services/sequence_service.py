"""
SequenceService -- monotonic sequence allocation via locked counter rows.

Responsibility:
    Provides strictly increasing numbers for party codes (SP_00001,
    CL_00001, ...).  Uses a dedicated counter table with row-level locking
    (``SELECT ... FOR UPDATE``) so concurrent registrations never receive
    the same number.

Architecture position:
    Kernel > Services -- imperative shell infrastructure.
    Called by SqlEntityStore.next_sequence_value on behalf of PartyService.

Invariants enforced:
    - Monotonicity: the locked counter row is the sole source of truth
      for the next value; aggregate-max-plus-one is never used.
    - Transactional: an increment is only visible after the caller's
      transaction commits.  Rollback returns the value.

Failure modes:
    - IntegrityError: two transactions creating the same counter row at
      once.  The loser's transaction fails; callers retry the request.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from invoice_kernel.logging_config import get_logger
from invoice_kernel.models.sequence import SequenceCounter

logger = get_logger("services.sequence")


class SequenceService:
    """
    Service for generating transactional sequence numbers.

    Non-goals:
        - Does NOT call ``session.commit()`` -- caller controls boundaries.
    """

    SUPPLIER = "supplier"
    CLIENT = "client"

    def __init__(self, session: Session):
        """
        Initialize the sequence service.

        Args:
            session: SQLAlchemy session (should be in a transaction).
        """
        self._session = session

    def next_value(self, sequence_name: str) -> int:
        """
        Get the next value for a named sequence.

        Locks the counter row (creating it on first use), increments it,
        and returns the new value.

        Args:
            sequence_name: Name of the sequence.

        Returns:
            The next sequence value (always > 0).
        """
        counter = self._session.execute(
            select(SequenceCounter)
            .where(SequenceCounter.name == sequence_name)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

        if counter is None:
            counter = SequenceCounter(name=sequence_name, current_value=0)
            self._session.add(counter)

        counter.current_value += 1
        self._session.flush()
        logger.debug(
            "sequence_allocated",
            extra={"sequence_name": sequence_name, "value": counter.current_value},
        )
        return counter.current_value

    def current_value(self, sequence_name: str) -> int | None:
        """
        Get the current value of a sequence without incrementing.

        Args:
            sequence_name: Name of the sequence.

        Returns:
            Current value, or None if the sequence was never used.
        """
        return self._session.execute(
            select(SequenceCounter.current_value).where(
                SequenceCounter.name == sequence_name
            )
        ).scalar_one_or_none()
