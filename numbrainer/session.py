"""
In-memory game session.
Holds the whole state of one hot-seat game (two players, one screen) and is
the only thing allowed to change it. Callers drive it through the public
methods and read it back through the properties; every method returns an
Outcome instead of raising.
"""

import logging
import re
from dataclasses import dataclass, field
from threading import RLock
from time import time
from typing import Dict, List, Optional, Tuple

from .engine import is_win, score_guess, validate_number
from .errors import EngineError, IllegalOperation, InvalidConfig
from .types import GamePhase, Player, ResultKind, SecretNumber

logger = logging.getLogger(__name__)

DEFAULT_NAMES = {Player.PLAYER_1: "Player 1", Player.PLAYER_2: "Player 2"}

# Custom names: ASCII letters and spaces, starting with a letter
MAX_NAME_LENGTH = 12
NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z ]*\Z")

TURN_LIMIT_PROMPT = "Enter the number of turns for this game."
TIME_LIMIT_PROMPT = "Enter time limit per turn (seconds):"
DRAW_MESSAGE = "Turn limit reached! It's a draw."

# Forward-only; reset() is the only way back to the start
TRANSITIONS = {
    GamePhase.CONFIGURING_TURN_LIMIT: {GamePhase.CONFIGURING_TIME_LIMIT, GamePhase.SETTING_NUMBERS},
    GamePhase.CONFIGURING_TIME_LIMIT: {GamePhase.SETTING_NUMBERS},
    GamePhase.SETTING_NUMBERS: {GamePhase.PLAYING},
    GamePhase.PLAYING: {GamePhase.FINISHED},
    GamePhase.FINISHED: set(),
}

CONFIG_PHASES = (GamePhase.CONFIGURING_TURN_LIMIT, GamePhase.CONFIGURING_TIME_LIMIT)


@dataclass(frozen=True)
class FeedbackEntry:
    player: Player
    message: str
    guess: Optional[str] = None  # None for a timeout
    correct_digits: int = 0
    correct_positions: int = 0
    timed_out: bool = False
    timestamp: float = field(default_factory=time)


@dataclass(frozen=True)
class GameResult:
    kind: ResultKind = ResultKind.IN_PROGRESS
    winner: Optional[Player] = None

    @classmethod
    def win(cls, player: Player) -> "GameResult":
        return cls(kind=ResultKind.WIN, winner=player)

    @classmethod
    def draw(cls) -> "GameResult":
        return cls(kind=ResultKind.DRAW)


IN_PROGRESS = GameResult()


@dataclass(frozen=True)
class TurnState:
    active_player: Player
    player_1_turns: int
    player_2_turns: int
    turn_limit: Optional[int]
    time_limit: Optional[int]
    remaining_time: Optional[float]


@dataclass(frozen=True)
class PlayerView:
    player: Player
    name: str
    turns_taken: int
    number_set: bool
    secret: Optional[SecretNumber]  # only once finished


@dataclass(frozen=True)
class GameSnapshot:
    phase: GamePhase
    active_player: Player
    message: str
    turn_limit: Optional[int]
    time_limit: Optional[int]
    remaining_time: Optional[float]
    timing_enabled: bool
    players: Tuple[PlayerView, ...]
    result: GameResult
    history: Tuple[FeedbackEntry, ...]


@dataclass(frozen=True)
class Outcome:
    ok: bool
    error: Optional[EngineError] = None
    feedback: Optional[FeedbackEntry] = None

    @classmethod
    def success(cls, feedback: Optional[FeedbackEntry] = None) -> "Outcome":
        return cls(ok=True, feedback=feedback)

    @classmethod
    def failure(cls, error: EngineError) -> "Outcome":
        return cls(ok=False, error=error)

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


def _check_limit(value, label: str) -> Optional[InvalidConfig]:
    # bool is an int subclass; True is not a turn limit
    if isinstance(value, bool) or not isinstance(value, int):
        return InvalidConfig(f"{label} must be a whole number.")
    if value < 1:
        return InvalidConfig(f"{label} must be at least 1.")
    return None


def _check_elapsed(value) -> Optional[InvalidConfig]:
    # "not value >= 0" also catches NaN
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value >= 0:
        return InvalidConfig("Elapsed time must be a non-negative number of seconds.")
    return None


class GameEngine:
    def __init__(self, timing_enabled: bool = True) -> None:
        self._timing_enabled = timing_enabled
        self._lock = RLock()
        self._init_state()

    def _init_state(self) -> None:
        self._phase = GamePhase.CONFIGURING_TURN_LIMIT
        self._names: Dict[Player, str] = dict(DEFAULT_NAMES)
        self._numbers: Dict[Player, SecretNumber] = {}
        self._turns: Dict[Player, int] = {Player.PLAYER_1: 0, Player.PLAYER_2: 0}
        self._turn_limit: Optional[int] = None
        self._time_limit: Optional[int] = None
        self._remaining_time: Optional[float] = None
        self._active = Player.PLAYER_1
        self._result = IN_PROGRESS
        self._history: List[FeedbackEntry] = []
        self._message = TURN_LIMIT_PROMPT

    # ---------------- Configuration ----------------

    def configure_turn_limit(self, turn_limit: int) -> Outcome:
        with self._lock:
            error = self._require_phase("configure the turn limit", GamePhase.CONFIGURING_TURN_LIMIT)
            if error is None:
                error = _check_limit(turn_limit, "Turn limit")
            if error is not None:
                return self._reject(error)

            self._turn_limit = turn_limit
            if self._timing_enabled:
                self._move_to(GamePhase.CONFIGURING_TIME_LIMIT)
                self._message = TIME_LIMIT_PROMPT
            else:
                self._move_to(GamePhase.SETTING_NUMBERS)
                self._message = self._set_number_prompt(Player.PLAYER_1)
            return Outcome.success()

    def configure_time_limit(self, seconds: int) -> Outcome:
        with self._lock:
            error = self._require_phase("configure the time limit", GamePhase.CONFIGURING_TIME_LIMIT)
            if error is None:
                error = _check_limit(seconds, "Time limit")
            if error is not None:
                return self._reject(error)

            self._time_limit = seconds
            self._move_to(GamePhase.SETTING_NUMBERS)
            self._message = self._set_number_prompt(Player.PLAYER_1)
            return Outcome.success()

    def set_player_names(self, first: str, second: str) -> Outcome:
        """Only while configuring; names cannot change once numbers are being set."""
        with self._lock:
            error = self._require_phase("rename players", *CONFIG_PHASES)
            if error is not None:
                return self._reject(error)

            if not isinstance(first, str) or not isinstance(second, str):
                return self._reject(InvalidConfig("Player names must be text."))
            first, second = first.strip(), second.strip()
            if not first or not second:
                return self._reject(InvalidConfig("Player names must not be empty."))
            if len(first) > MAX_NAME_LENGTH or len(second) > MAX_NAME_LENGTH:
                return self._reject(InvalidConfig(f"Player names must be at most {MAX_NAME_LENGTH} characters."))
            if not NAME_PATTERN.match(first) or not NAME_PATTERN.match(second):
                return self._reject(InvalidConfig("Player names may only contain letters and spaces."))
            if first == second:
                return self._reject(InvalidConfig("Player names must be different."))

            self._names = {Player.PLAYER_1: first, Player.PLAYER_2: second}
            return Outcome.success()

    # ---------------- Setup ----------------

    def set_player_number(self, number: str) -> Outcome:
        with self._lock:
            error = self._require_phase("set a number", GamePhase.SETTING_NUMBERS)
            if error is None:
                error = validate_number(number)
            if error is not None:
                return self._reject(error)

            player = self._active
            self._numbers[player] = number
            logger.info("%s set their number", self._names[player])

            if player is Player.PLAYER_1:
                self._active = Player.PLAYER_2
                self._message = self._set_number_prompt(Player.PLAYER_2)
                return Outcome.success()

            # Both numbers are in: start the game with player 1
            self._active = Player.PLAYER_1
            if self._timing_enabled:
                self._remaining_time = float(self._time_limit)
            self._move_to(GamePhase.PLAYING)
            self._message = f"Game starts! {self._names[Player.PLAYER_1]}'s turn to guess."
            return Outcome.success()

    # ---------------- Play ----------------

    def submit_guess(self, guess: str) -> Outcome:
        with self._lock:
            error = self._require_phase("guess", GamePhase.PLAYING)
            if error is None:
                error = validate_number(guess)
            if error is not None:
                # Invalid guesses never cost a turn
                return self._reject(error)

            player = self._active
            name = self._names[player]
            target = self._numbers[player.other]
            correct_digits, correct_positions = score_guess(target, guess)

            if is_win(target, guess):
                entry = self._record(
                    player, f"{name} wins!",
                    guess=guess, correct_digits=correct_digits, correct_positions=correct_positions,
                )
                self._finish(GameResult.win(player))
                return Outcome.success(entry)

            self._turns[player] += 1
            entry = self._record(
                player,
                f"{name} guessed {guess}: {correct_digits} correct digits, {correct_positions} in position.",
                guess=guess, correct_digits=correct_digits, correct_positions=correct_positions,
            )
            logger.debug("%s scored %d/%d", name, correct_digits, correct_positions)

            if not self._both_at_limit():
                self._switch_turns()
            self._check_draw()
            return Outcome.success(entry)

    def advance_clock(self, elapsed_seconds: float) -> Outcome:
        """
        Called once per update tick with the seconds since the last call.
        At most one timeout is handled per call.
        """
        with self._lock:
            if self._phase is not GamePhase.PLAYING or not self._timing_enabled:
                return Outcome.success()

            error = _check_elapsed(elapsed_seconds)
            if error is not None:
                return self._reject(error)

            self._remaining_time -= elapsed_seconds
            if self._remaining_time > 0:
                return Outcome.success()

            # Time ran out: counts as a used turn
            player = self._active
            self._turns[player] += 1
            entry = self._record(player, f"{self._names[player]} ran out of time!", timed_out=True)
            logger.debug("%s ran out of time", self._names[player])

            self._switch_turns()
            self._check_draw()
            return Outcome.success(entry)

    def reset(self) -> Outcome:
        with self._lock:
            self._init_state()
            logger.info("Game reset")
            return Outcome.success()

    # ---------------- Read accessors ----------------

    @property
    def timing_enabled(self) -> bool:
        return self._timing_enabled

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def active_player(self) -> Player:
        return self._active

    @property
    def turn_limit(self) -> Optional[int]:
        return self._turn_limit

    @property
    def time_limit(self) -> Optional[int]:
        return self._time_limit

    @property
    def remaining_time(self) -> Optional[float]:
        return self._remaining_time

    @property
    def message(self) -> str:
        return self._message

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def history(self) -> Tuple[FeedbackEntry, ...]:
        with self._lock:
            return tuple(self._history)

    @property
    def turn_state(self) -> TurnState:
        with self._lock:
            return TurnState(
                active_player=self._active,
                player_1_turns=self._turns[Player.PLAYER_1],
                player_2_turns=self._turns[Player.PLAYER_2],
                turn_limit=self._turn_limit,
                time_limit=self._time_limit,
                remaining_time=self._remaining_time,
            )

    @property
    def is_input_phase(self) -> bool:
        return self._phase in (*CONFIG_PHASES, GamePhase.SETTING_NUMBERS)

    @property
    def is_gameplay_phase(self) -> bool:
        return self._phase is GamePhase.PLAYING

    @property
    def is_finished(self) -> bool:
        return self._phase is GamePhase.FINISHED

    def turns_taken(self, player: Player) -> int:
        return self._turns[player]

    def player_name(self, player: Player) -> str:
        return self._names[player]

    def has_secret(self, player: Player) -> bool:
        return player in self._numbers

    def secret(self, player: Player) -> Optional[SecretNumber]:
        """Return a player's number ONLY for finished games; else None."""
        if not self.is_finished:
            return None
        return self._numbers.get(player)

    def snapshot(self) -> "GameSnapshot":
        """Everything a view needs, read under one lock so the parts agree."""
        with self._lock:
            players = tuple(
                PlayerView(
                    player=player,
                    name=self._names[player],
                    turns_taken=self._turns[player],
                    number_set=player in self._numbers,
                    secret=self.secret(player),
                )
                for player in Player
            )
            return GameSnapshot(
                phase=self._phase,
                active_player=self._active,
                message=self._message,
                turn_limit=self._turn_limit,
                time_limit=self._time_limit,
                remaining_time=self._remaining_time,
                timing_enabled=self._timing_enabled,
                players=players,
                result=self._result,
                history=tuple(self._history),
            )

    # ---------------- Helpers ----------------

    def _require_phase(self, action: str, *allowed: GamePhase) -> Optional[IllegalOperation]:
        if self._phase in allowed:
            return None
        return IllegalOperation(f"Cannot {action} while {self._phase.value.replace('_', ' ')}.")

    def _reject(self, error: EngineError) -> Outcome:
        logger.warning("Rejected (%s): %s", type(error).__name__, error.reason)
        return Outcome.failure(error)

    def _move_to(self, phase: GamePhase) -> None:
        if phase not in TRANSITIONS[self._phase]:
            raise RuntimeError(f"Illegal phase transition {self._phase.value} -> {phase.value}")
        logger.info("Phase %s -> %s", self._phase.value, phase.value)
        self._phase = phase

    def _set_number_prompt(self, player: Player) -> str:
        return f"{self._names[player]}, set your 4-digit number."

    def _record(self, player: Player, message: str, **details) -> FeedbackEntry:
        entry = FeedbackEntry(player=player, message=message, **details)
        self._history.append(entry)
        self._message = message
        return entry

    def _switch_turns(self) -> None:
        self._active = self._active.other
        if self._timing_enabled:
            self._remaining_time = float(self._time_limit)

    def _both_at_limit(self) -> bool:
        return all(turns >= self._turn_limit for turns in self._turns.values())

    def _check_draw(self) -> None:
        if self._phase is GamePhase.PLAYING and self._both_at_limit():
            self._finish(GameResult.draw())
            self._message = DRAW_MESSAGE

    def _finish(self, result: GameResult) -> None:
        # Result and phase change together, exactly once
        self._result = result
        self._move_to(GamePhase.FINISHED)
        if result.kind is ResultKind.WIN:
            logger.info("%s wins", self._names[result.winner])
        else:
            logger.info("Draw after %d turns each", self._turn_limit)
