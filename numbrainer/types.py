"""
Labels for clarity.
"""

from enum import Enum

SecretNumber = str  # 4 unique digits, ex. "0192"


class Player(str, Enum):
    PLAYER_1 = "player_1"
    PLAYER_2 = "player_2"

    @property
    def other(self) -> "Player":
        return Player.PLAYER_2 if self is Player.PLAYER_1 else Player.PLAYER_1


class GamePhase(str, Enum):
    CONFIGURING_TURN_LIMIT = "configuring_turn_limit"
    CONFIGURING_TIME_LIMIT = "configuring_time_limit"
    SETTING_NUMBERS = "setting_numbers"
    PLAYING = "playing"
    FINISHED = "finished"


class ResultKind(str, Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"
