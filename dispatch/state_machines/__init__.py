from .match_state import MatchState, MatchStateException, transition_match

__all__ = ["MatchState", "MatchStateException", "transition_match"]
