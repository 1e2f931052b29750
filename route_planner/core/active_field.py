"""State machine for the active field (which endpoint takes the next map click).

Uses python-statemachine with SessionState as the model, so the current value
lives on the session object and survives Streamlit reruns.

States (3 states):
    NO_TARGET: Initial. Map clicks are rejected with NoActiveField.
    START_TARGET: Map clicks resolve the start endpoint.
    END_TARGET: Map clicks resolve the end endpoint.

Transitions:
    target_start: any -> START_TARGET ("select from map" or text edit on start)
    target_end: any -> END_TARGET ("select from map" or text edit on end)
    clear_target: any -> NO_TARGET ("clear" action; allowed from NO_TARGET too)

Targeting is sticky: a map click does not leave START_TARGET/END_TARGET.
The user keeps clicking to refine the same endpoint until focus changes or
the planner is cleared.
"""

from __future__ import annotations

import logging
from typing import Any

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from route_planner.core.context import SessionState
from route_planner.errors import NoActiveField
from route_planner.model.endpoint import EndpointRole

logger = logging.getLogger(__name__)


class ActiveFieldController(StateMachine):
    """Single-selection state machine over {None, Start, End}."""

    # ==========================================================================
    # State Definitions
    # ==========================================================================

    no_target = State("NoTarget", initial=True)
    start_target = State("StartTarget")
    end_target = State("EndTarget")

    # ==========================================================================
    # Transitions
    # ==========================================================================

    target_start = no_target.to(start_target) | start_target.to(start_target) | end_target.to(start_target)
    target_end = no_target.to(end_target) | start_target.to(end_target) | end_target.to(end_target)
    clear_target = no_target.to(no_target) | start_target.to(no_target) | end_target.to(no_target)

    # ==========================================================================
    # Initialization
    # ==========================================================================

    def __init__(self, context: SessionState | None = None, start_value: str | None = None) -> None:
        """Initialize state machine with model pattern.

        Args:
            context: Session state used as model (creates new if None)
            start_value: Optional initial state value (for restoring state)
        """
        model = context or SessionState()
        super().__init__(model=model, start_value=start_value)

    @property
    def context(self) -> SessionState:
        """Alias for model."""
        return self.model

    # ==========================================================================
    # State Check Properties
    # ==========================================================================

    @property
    def has_target(self) -> bool:
        """True if a map click would be accepted."""
        return not self.no_target.is_active

    @property
    def active_role(self) -> EndpointRole | None:
        """Endpoint receiving the next map click, or None."""
        if self.start_target.is_active:
            return EndpointRole.START
        if self.end_target.is_active:
            return EndpointRole.END
        return None

    # ==========================================================================
    # Role-based API
    # ==========================================================================

    def target(self, role: EndpointRole) -> None:
        """Make `role` the click target."""
        if role == EndpointRole.START:
            self.target_start()
        else:
            self.target_end()

    def require_target(self) -> EndpointRole:
        """Return the click target for a map click.

        Raises:
            NoActiveField: If no endpoint is selected
        """
        role = self.active_role
        if role is None:
            raise NoActiveField()
        return role

    def get_state_name(self) -> str:
        """Get current state name for display."""
        return self.current_state.name

    def try_transition(self, event: str, **kwargs: Any) -> bool:
        """Attempt a transition, returning success/failure."""
        try:
            self.send(event, **kwargs)
            return True
        except TransitionNotAllowed:
            logger.warning(f"Transition '{event}' not allowed from {self.get_state_name()}")
            return False

    def __repr__(self) -> str:
        return f"ActiveFieldController(state={self.get_state_name()})"
