"""Controllers module - Application-level controllers for coordinating business logic."""

from controllers.received_cards_controller import ReceivedCardsController
from controllers.session_manager import ReceivedCardsSessionManager

__all__ = ["ReceivedCardsController", "ReceivedCardsSessionManager"]
