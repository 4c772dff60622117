from .turn_event import TurnEvent

__all__ = ["TurnEvent"]
