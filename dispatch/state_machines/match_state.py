from enum import Enum


class MatchState(str, Enum):
    SCORED = "SCORED"
    OUTCOME_RECORDED = "OUTCOME_RECORDED"
    UNRECORDED = "UNRECORDED"


class MatchStateException(Exception):
    """Raised when an invalid match transition is attempted."""
    pass


TERMINAL_STATES = (MatchState.OUTCOME_RECORDED, MatchState.UNRECORDED)


def transition_match(current: MatchState, target: MatchState) -> MatchState:
    """
    SCORED is the only live state. A match either gets its outcome reported
    (OUTCOME_RECORDED) or the caller drops it (UNRECORDED). Both are final.
    """
    current = MatchState(current)
    target = MatchState(target)

    if current in TERMINAL_STATES:
        raise MatchStateException(f"Match already terminal ({current.value}), cannot move to {target.value}")

    if target not in TERMINAL_STATES:
        raise MatchStateException(f"Cannot transition match from {current.value} to {target.value}")

    return target
