'''
NumBrainer hot-seat API

Endpoints:
GET  /game                 -> read state (phase, turns, clock, history)
GET  /game/history         -> most recent feedback entries
POST /game/turn-limit      -> configure turns per player
POST /game/time-limit      -> configure seconds per turn
POST /game/players         -> rename players (while configuring)
POST /game/numbers         -> set the acting player's secret number
POST /game/guesses         -> submit a guess
POST /game/clock           -> advance the turn clock
POST /game/reset           -> start over

One process = one game: two players share the same screen.
This layer only translates HTTP to engine calls; all rules live in the engine.
'''

from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from .config import configure_logging, load_settings
from .errors import IllegalOperation
from .session import FeedbackEntry, GameEngine, Outcome
from .schemas import (
    ClockRequest,
    FeedbackEntryOut,
    GameStateOut,
    GuessRequest,
    HistoryOut,
    NumberRequest,
    PlayerNamesRequest,
    PlayerOut,
    ResultOut,
    TimeLimitRequest,
    TurnLimitRequest,
)

settings = load_settings()
configure_logging(settings.log_level)

app = FastAPI(title="NumBrainer API", version="1.0.0")

# Allow everything in dev so the docs and front-end work easily
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

_engine = GameEngine(timing_enabled=settings.timing_enabled)


def get_engine() -> GameEngine:
    return _engine


# --- DTO builders: engine -> API response ---

def _to_entry_out(entry: FeedbackEntry) -> FeedbackEntryOut:
    return FeedbackEntryOut(
        player=entry.player,
        guess=entry.guess,
        correct_digits=entry.correct_digits,
        correct_positions=entry.correct_positions,
        timed_out=entry.timed_out,
        message=entry.message,
        timestamp=entry.timestamp,
    )


def _to_state(engine: GameEngine) -> GameStateOut:
    # One locked read, so a clock tick on another worker can't split the response
    snap = engine.snapshot()
    players = [
        PlayerOut(
            player=view.player,
            name=view.name,
            turns_taken=view.turns_taken,
            number_set=view.number_set,
            secret=view.secret,
        )
        for view in snap.players
    ]
    return GameStateOut(
        phase=snap.phase,
        active_player=snap.active_player,
        message=snap.message,
        turn_limit=snap.turn_limit,
        time_limit=snap.time_limit,
        remaining_time=snap.remaining_time,
        timing_enabled=snap.timing_enabled,
        players=players,
        result=ResultOut(kind=snap.result.kind, winner=snap.result.winner),
        history=[_to_entry_out(e) for e in snap.history],
    )


def _respond(outcome: Outcome, engine: GameEngine) -> GameStateOut:
    if outcome.error is not None:
        status = 409 if isinstance(outcome.error, IllegalOperation) else 400
        raise HTTPException(status_code=status, detail=outcome.error.reason)
    return _to_state(engine)


# ---------------- Routes ----------------

@app.get("/game", response_model=GameStateOut, summary="Get current game state")
def get_game(engine: GameEngine = Depends(get_engine)) -> GameStateOut:
    return _to_state(engine)


@app.get("/game/history", response_model=HistoryOut, summary="Get the most recent feedback")
def get_history(
    last: Optional[int] = Query(None, ge=1, description="How many entries to return"),
    engine: GameEngine = Depends(get_engine),
) -> HistoryOut:
    history = engine.history
    limit = last if last is not None else settings.history_limit
    return HistoryOut(
        total=len(history),
        entries=[_to_entry_out(e) for e in history[-limit:]],
    )


@app.post("/game/turn-limit", response_model=GameStateOut, summary="Configure turns per player")
def configure_turn_limit(payload: TurnLimitRequest, engine: GameEngine = Depends(get_engine)) -> GameStateOut:
    return _respond(engine.configure_turn_limit(payload.turn_limit), engine)


@app.post("/game/time-limit", response_model=GameStateOut, summary="Configure seconds per turn")
def configure_time_limit(payload: TimeLimitRequest, engine: GameEngine = Depends(get_engine)) -> GameStateOut:
    return _respond(engine.configure_time_limit(payload.seconds), engine)


@app.post("/game/players", response_model=GameStateOut, summary="Rename the players")
def set_player_names(payload: PlayerNamesRequest, engine: GameEngine = Depends(get_engine)) -> GameStateOut:
    return _respond(engine.set_player_names(payload.player_1, payload.player_2), engine)


@app.post("/game/numbers", response_model=GameStateOut, summary="Set the acting player's secret number")
def set_player_number(payload: NumberRequest, engine: GameEngine = Depends(get_engine)) -> GameStateOut:
    return _respond(engine.set_player_number(payload.number), engine)


@app.post("/game/guesses", response_model=GameStateOut, summary="Submit a guess")
def submit_guess(payload: GuessRequest, engine: GameEngine = Depends(get_engine)) -> GameStateOut:
    return _respond(engine.submit_guess(payload.guess), engine)


@app.post("/game/clock", response_model=GameStateOut, summary="Advance the turn clock")
def advance_clock(payload: ClockRequest, engine: GameEngine = Depends(get_engine)) -> GameStateOut:
    return _respond(engine.advance_clock(payload.elapsed_seconds), engine)


@app.post("/game/reset", response_model=GameStateOut, summary="Start over")
def reset_game(engine: GameEngine = Depends(get_engine)) -> GameStateOut:
    return _respond(engine.reset(), engine)
