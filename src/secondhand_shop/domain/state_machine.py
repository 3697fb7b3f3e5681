"""Sale and Offer lifecycle guards.

Uses python-statemachine to enforce legal lifecycle transitions at the domain
level. No matter what the shop service does, an illegal transition (e.g. paying
for an offer the seller never accepted) raises TransitionNotAllowed.

A machine is instantiated from a record's current status, the event is fired,
and only then is the record's status field updated.

Transition table:
    Sale:
        LISTED    -> SOLD        (purchased)
    Offer:
        PENDING   -> ACCEPTED    (seller_accepts)
        ACCEPTED  -> PURCHASED   (buyer_pays)
"""

from __future__ import annotations

from statemachine import State, StateMachine


def _check_status(machine: StateMachine, current_status: str) -> None:
    valid_values = {s.value for s in machine.states}
    if current_status not in valid_values:
        valid = ", ".join(sorted(valid_values))
        raise ValueError(f"Unknown status '{current_status}'. Valid states: {valid}")


class SaleStateMachine(StateMachine):
    """Guards a sale listing: LISTED until the first successful purchase."""

    LISTED = State("LISTED", initial=True)
    SOLD = State("SOLD", final=True)

    purchased = LISTED.to(SOLD)

    def __init__(self, current_status: str = "LISTED") -> None:
        _check_status(self, current_status)
        super().__init__(start_value=current_status)

    @property
    def status(self) -> str:
        return str(self.current_state.value)

    def get_allowed_events(self) -> list[str]:
        return [event.id for event in self.allowed_events]


class OfferStateMachine(StateMachine):
    """Guards an offer through negotiation and payment.

    Usage:
        sm = OfferStateMachine(current_status="PENDING")
        sm.seller_accepts()  # transitions to ACCEPTED
        sm.status            # "ACCEPTED"
    """

    # --- States ---
    PENDING = State("PENDING", initial=True)
    ACCEPTED = State("ACCEPTED")
    PURCHASED = State("PURCHASED", final=True)

    # --- Events / Transitions ---
    seller_accepts = PENDING.to(ACCEPTED)
    buyer_pays = ACCEPTED.to(PURCHASED)

    def __init__(self, current_status: str = "PENDING") -> None:
        """Initialize the state machine at a given status.

        Args:
            current_status: The current OfferStatus value (e.g., "ACCEPTED").
        """
        _check_status(self, current_status)
        super().__init__(start_value=current_status)

    @property
    def status(self) -> str:
        """Return the current state value as a string (matches OfferStatus)."""
        return str(self.current_state.value)

    def get_allowed_events(self) -> list[str]:
        """Return a list of event names that can fire from the current state."""
        return [event.id for event in self.allowed_events]


def validate_transition(
    machine_cls: type[SaleStateMachine] | type[OfferStateMachine],
    current_status: str,
    event_name: str,
) -> str:
    """Validate a transition and return the new status.

    Creates a temporary machine of ``machine_cls`` at ``current_status``,
    fires the named event, and returns the resulting status string.

    Raises:
        TransitionNotAllowed: If the transition is illegal.
        ValueError: If the status or event name is invalid.
    """
    sm = machine_cls(current_status=current_status)

    event_method = getattr(sm, event_name, None)
    if event_name not in {e.id for e in sm.events} or not callable(event_method):
        raise ValueError(
            f"Unknown event '{event_name}'. "
            f"Allowed events from {current_status}: {sm.get_allowed_events()}"
        )

    event_method()
    return sm.status
