"""
Custom exceptions for the ladder engine with user-friendly error messages.
"""

class LadderException(Exception):
    """Base exception for ladder engine errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message

class PlayerNotFoundError(LadderException):
    """Raised when a player referenced by an operation is absent from the roster."""
    def __init__(self, player_id: str, ladder: str = None):
        self.player_id = player_id
        where = f" on ladder '{ladder}'" if ladder else ""
        super().__init__(
            f"Player '{player_id}' not found in roster{where}",
            f"❌ Player '{player_id}' is not on this ladder!"
        )

class InvariantViolationError(LadderException):
    """Raised when ladder positions are not a dense 1..N sequence."""
    def __init__(self, details: str):
        super().__init__(
            f"Ladder position invariant violated: {details}",
            "❌ Ladder positions are out of sync. Please refresh and try again."
        )

class UnknownLadderError(LadderException, ValueError):
    """Raised when a ladder name has no configuration."""
    def __init__(self, ladder_name: str):
        super().__init__(
            f"Unknown ladder '{ladder_name}'",
            f"❌ Ladder '{ladder_name}' does not exist!"
        )
