"""
Everything the engine can refuse.
The engine never raises these past its own methods; it hands them back
inside an Outcome so the caller decides what to show.
"""


class EngineError(Exception):
    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


# Turn limit, time limit, player names or clock tick out of range
class InvalidConfig(EngineError):
    pass


# Number/guess broke one of the 4-unique-digits rules
class ValidationError(EngineError):
    pass


# Operation called in the wrong phase (ex. a guess during setup)
class IllegalOperation(EngineError):
    pass
