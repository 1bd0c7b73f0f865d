"""Resolution of a requested State into Jira workflow transitions.

Jira does not allow setting the status field directly. Each issue offers a
set of named transitions depending on its current status, and that set
changes after every transition. The decision table below follows the one
workflow the tracker exposes (Open -> Resolved -> Closed) and allows at most
two hops. It is not a general path search.

Multi-hop changes are not atomic: if the second hop fails the issue stays in
the intermediate status.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from issue_tracker_interface.errors import TransitionError
from issue_tracker_interface.issue import State

logger = logging.getLogger(__name__)

OPEN = "Open"
RESOLVED = "Resolved"
CLOSED = "Closed"

#status name -> transition id
Transitions = dict[str, str]


def resolve_state(
    target: State,
    fetch_transitions: Callable[[], Transitions],
    perform_transition: Callable[[str], None],
) -> None:
    """Perform the transitions leading to target.

    Args:
        target:             The requested state
        fetch_transitions:  Returns the transitions available right now
        perform_transition: Performs the transition with the given id

    Raises:
        TransitionError: If no path to target is available.
        ValueError: If target is not a known State.

    """
    available = fetch_transitions()
    if not available:
        raise TransitionError("no transitions available")

    if target == State.RESOLVED:
        if RESOLVED not in available:
            if OPEN not in available:
                # The issue is most likely closed already
                logger.warning("Cannot transition the issue to Resolved or Open - skipping")
                return
            _perform(perform_transition, available, OPEN)
            available = fetch_transitions()
            if RESOLVED not in available:
                raise TransitionError("cannot reach Resolved via Open")
        _perform(perform_transition, available, RESOLVED)
    elif target == State.CLOSED:
        if CLOSED not in available:
            if RESOLVED not in available:
                raise TransitionError("cannot reach Closed")
            _perform(perform_transition, available, RESOLVED)
            available = fetch_transitions()
            if CLOSED not in available:
                raise TransitionError("cannot reach Closed via Resolved")
        _perform(perform_transition, available, CLOSED)
    elif target == State.OPEN:
        if OPEN not in available:
            raise TransitionError("cannot reach Open")
        _perform(perform_transition, available, OPEN)
    else:
        raise ValueError(f"Unknown state {target!r}")


def _perform(perform_transition: Callable[[str], None], available: Transitions, name: str) -> None:
    logger.debug("Performing transition to %s (id %s)", name, available[name])
    perform_transition(available[name])
