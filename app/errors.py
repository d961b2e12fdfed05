class GameError(Exception):
    """
    Base class for failures reported to the player as
    {"success": false, "message": ...}.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# Validation: wrong length, not in dictionary
class GuessValidationError(GameError):
    pass


# Guess outside the current alphabetical range
class BoundaryError(GameError):
    pass


# State: puzzle/game missing, game finished
class GameNotFoundError(GameError):
    def __init__(self, message: str = "Game not found"):
        super().__init__(message)


class GameCompletedError(GameError):
    def __init__(self, message: str = "Game already completed"):
        super().__init__(message)


class PuzzleGenerationError(GameError):
    pass


# Persistence
class PersistenceError(GameError):
    def __init__(self, message: str = "Failed to update game"):
        super().__init__(message)


class ConcurrentUpdateError(PersistenceError):
    def __init__(self, message: str = "Game was updated by another request"):
        super().__init__(message)
