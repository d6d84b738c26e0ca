"""
Pydantic models for the HTTP layer.
- Requests are only shape-checked here (types, lengths); the game rules
  themselves (unique digits, limits >= 1) stay in the engine so every
  caller gets the same messages.
- Responses are read-only snapshots of the engine; secrets are never
  included while a game is still running.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .types import GamePhase, Player, ResultKind


# 1. Configuration requests
class TurnLimitRequest(BaseModel):
    turn_limit: int = Field(..., description="Guesses allowed per player before a draw")

    model_config = {"json_schema_extra": {"examples": [{"turn_limit": 10}]}}


class TimeLimitRequest(BaseModel):
    seconds: int = Field(..., description="Seconds allowed per turn")

    model_config = {"json_schema_extra": {"examples": [{"seconds": 30}]}}


class PlayerNamesRequest(BaseModel):
    player_1: str = Field(..., description="Display name for player 1: letters and spaces, up to 12")
    player_2: str = Field(..., description="Display name for player 2: letters and spaces, up to 12")


# 2. Setup and play requests
class NumberRequest(BaseModel):
    number: str = Field(..., description="Secret 4-digit number, no repeated digits")

    model_config = {"json_schema_extra": {"examples": [{"number": "1234"}]}}


class GuessRequest(BaseModel):
    guess: str = Field(..., description="A 4-digit guess at the opponent's number")

    model_config = {"json_schema_extra": {"examples": [{"guess": "5678"}]}}


class ClockRequest(BaseModel):
    elapsed_seconds: float = Field(..., ge=0, description="Seconds since the last tick")


# 3. Describes the feedback for a single guess or timeout
class FeedbackEntryOut(BaseModel):
    player: Player = Field(..., description="Who acted")
    guess: Optional[str] = Field(None, description="The guess; empty for a timeout")
    correct_digits: int = Field(..., description="Guess digits found anywhere in the target")
    correct_positions: int = Field(..., description="Guess digits in the right place")
    timed_out: bool = Field(..., description="True when the turn ended on the clock")
    message: str = Field(..., description="Feedback message")
    timestamp: float = Field(..., description="When the entry was recorded")


# 4. End-of-game result
class ResultOut(BaseModel):
    kind: ResultKind = Field(..., description="in_progress, win or draw")
    winner: Optional[Player] = Field(None, description="Set only for a win")


class PlayerOut(BaseModel):
    player: Player
    name: str
    turns_taken: int
    number_set: bool = Field(..., description="Whether this player has chosen a number")
    secret: Optional[str] = Field(None, description="Revealed only once the game is finished")


# 5. Represents the overall state of the game
class GameStateOut(BaseModel):
    phase: GamePhase = Field(..., description="Current stage of the game")
    active_player: Player = Field(..., description="Whose turn it is (to set a number or to guess)")
    message: str = Field(..., description="Latest prompt or feedback")
    turn_limit: Optional[int] = Field(None, description="Configured turns per player")
    time_limit: Optional[int] = Field(None, description="Configured seconds per turn")
    remaining_time: Optional[float] = Field(None, description="Seconds left in the current turn")
    timing_enabled: bool
    players: List[PlayerOut]
    result: ResultOut
    history: List[FeedbackEntryOut] = Field(..., description="Every resolved guess and timeout so far")


class HistoryOut(BaseModel):
    total: int = Field(..., description="Entries recorded this game")
    entries: List[FeedbackEntryOut] = Field(..., description="Most recent entries, oldest first")
