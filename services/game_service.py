"""Round and score bookkeeping for the guess-the-flag game.

``GameSession`` holds all mutable game state. The web layer calls
``select_answer``, ``acknowledge`` and ``reset_game`` in response to taps and
re-reads the session afterwards to render the page.
"""

import random
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

# fixed country catalog, one flag asset per entry
COUNTRIES = (
    "Estonia",
    "France",
    "Germany",
    "Ireland",
    "Italy",
    "Monaco",
    "Nigeria",
    "Poland",
    "Spain",
    "UK",
    "Ukraine",
    "US",
)

MAX_ROUNDS = 8
CHOICES = 3
NO_SELECTION = -1

# degrees added to the tapped flag's spin on every answer
SPIN_DEGREES = 360.0

CORRECT_TITLE = "Correct"
CORRECT_MESSAGE = "Congrats, you've answered right!"
WRONG_TITLE = "Wrong"
FINAL_TITLE = "You've finished the game"


class GameState(Enum):
    IN_ROUND = "in_round"
    AWAITING_NEXT = "awaiting_next"
    FINISHED = "finished"


class GameError(Exception):
    """Base class for game controller errors."""


class InvalidSelectionError(GameError, ValueError):
    """Raised when a tapped position is outside the displayed flags."""


class GameStateError(GameError):
    """Raised when an operation is not allowed in the current state."""


class Feedback:
    def __init__(self, title: str, message: str):
        self.title = title
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "message": self.message}

    def __eq__(self, other):
        if not isinstance(other, Feedback):
            return NotImplemented
        return (self.title, self.message) == (other.title, other.message)

    def __repr__(self):
        return f"Feedback(title={self.title!r}, message={self.message!r})"


class FlagEffect:
    """Visual effect request consumed by the presentation layer.

    The selected flag spins by ``rotation`` degrees; while ``animating`` the
    other flags fade and shrink. Has no influence on scoring.
    """

    def __init__(self, selected_position: int = NO_SELECTION, rotation: float = 0.0, animating: bool = False):
        self.selected_position = selected_position
        self.rotation = rotation
        self.animating = animating

    def is_selected(self, position: int) -> bool:
        return self.selected_position == position

    def is_faded(self, position: int) -> bool:
        return self.animating and not self.is_selected(position)

    def rotation_for(self, position: int) -> float:
        # the tapped flag spins about y, the others counter-rotate about z
        return self.rotation if self.is_selected(position) else -self.rotation

    def to_dict(self) -> Dict[str, Any]:
        return {
            "selected_position": self.selected_position,
            "rotation": self.rotation,
            "animating": self.animating,
        }


class AnswerOutcome:
    def __init__(self, correct: bool, feedback: Feedback, effect: FlagEffect, finished: bool):
        self.correct = correct
        self.feedback = feedback
        self.effect = effect
        self.finished = finished


Listener = Callable[[str, "GameSession"], None]


class GameSession:
    def __init__(self, rng: Optional[random.Random] = None, countries=COUNTRIES):
        self.rng = rng or random.Random()
        self.countries: List[str] = list(countries)
        if len(self.countries) < CHOICES:
            raise ValueError(f"need at least {CHOICES} countries, got {len(self.countries)}")
        self.score = 0
        self.question_index = -1
        self.correct_answer_position = 0
        self.state = GameState.IN_ROUND
        self.feedback: Optional[Feedback] = None
        self.effect = FlagEffect()
        self._listeners: List[Listener] = []

    @classmethod
    def new(cls, rng: Optional[random.Random] = None, listeners=()):
        """Create a session and advance it to round 0."""
        game = cls(rng=rng)
        for listener in listeners:
            game.add_listener(listener)
        game.start_round()
        return game

    # -- observers --

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _emit(self, event: str) -> None:
        for listener in self._listeners:
            listener(event, self)

    # -- read-only views --

    @property
    def selected_position(self) -> int:
        return self.effect.selected_position

    @property
    def is_finished(self) -> bool:
        return self.state is GameState.FINISHED

    @property
    def candidates(self) -> List[str]:
        return self.countries[:CHOICES]

    @property
    def prompt_country(self) -> str:
        return self.countries[self.correct_answer_position]

    @property
    def round_number(self) -> int:
        return self.question_index + 1

    @property
    def total_rounds(self) -> int:
        # rounds run for question indices 0..MAX_ROUNDS inclusive
        return MAX_ROUNDS + 1

    # -- operations --

    def start_round(self) -> None:
        self.question_index += 1
        self.rng.shuffle(self.countries)
        self.correct_answer_position = self.rng.randint(0, CHOICES - 1)
        self.effect = FlagEffect()
        self.feedback = None
        self.state = GameState.IN_ROUND
        self._emit("round_started")

    def select_answer(self, position: int) -> AnswerOutcome:
        """Score the tapped flag and move to the next dialog state.

        ``position`` must be one of the displayed flags (0, 1 or 2) and the
        session must be waiting for an answer.
        """
        if isinstance(position, bool) or not isinstance(position, int) or not 0 <= position < CHOICES:
            raise InvalidSelectionError(f"position must be between 0 and {CHOICES - 1}, got {position!r}")
        if self.state is not GameState.IN_ROUND:
            raise GameStateError(f"cannot answer while {self.state.value}")

        self.effect = FlagEffect(
            selected_position=position,
            rotation=self.effect.rotation + SPIN_DEGREES,
            animating=True,
        )

        correct = position == self.correct_answer_position
        if correct:
            self.score += 1
            self.feedback = Feedback(CORRECT_TITLE, CORRECT_MESSAGE)
        else:
            self.score -= 1
            self.feedback = Feedback(WRONG_TITLE, f"You're tapped on the flag of {self.countries[position]}")
        self._emit("answer_selected")

        self.check_completion()
        return AnswerOutcome(correct, self.feedback, self.effect, self.is_finished)

    def check_completion(self) -> bool:
        if self.state is not GameState.IN_ROUND or self.selected_position == NO_SELECTION:
            raise GameStateError("completion is only checked after an answer in the current round")
        if self.question_index >= MAX_ROUNDS:
            self.state = GameState.FINISHED
            self.feedback = Feedback(FINAL_TITLE, f"Your score is {self.score}")
            self._emit("game_finished")
            return True
        self.state = GameState.AWAITING_NEXT
        return False

    def acknowledge(self) -> None:
        """Dismiss the per-round dialog and ask the next question."""
        if self.state is not GameState.AWAITING_NEXT:
            raise GameStateError(f"no round result to acknowledge while {self.state.value}")
        self.start_round()

    def reset_game(self) -> None:
        if self.state is not GameState.FINISHED:
            raise GameStateError("a new game can only be started once the current one is finished")
        self.score = 0
        self.question_index = -1
        self._emit("game_reset")
        self.start_round()

    # -- serialization for the web session --

    def to_dict(self) -> Dict[str, Any]:
        return {
            "countries": list(self.countries),
            "score": self.score,
            "question_index": self.question_index,
            "correct_answer_position": self.correct_answer_position,
            "state": self.state.value,
            "feedback": self.feedback.to_dict() if self.feedback else None,
            "effect": self.effect.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], rng: Optional[random.Random] = None) -> "GameSession":
        try:
            countries = list(data["countries"])
            unknown = [c for c in countries if not isinstance(c, str) or c not in COUNTRIES]
            if unknown:
                raise ValueError(f"unknown countries {unknown!r}")
            game = cls(rng=rng, countries=countries)
            game.score = int(data["score"])
            game.question_index = int(data["question_index"])
            game.correct_answer_position = int(data["correct_answer_position"])
            game.state = GameState(data["state"])
            feedback = data.get("feedback")
            if feedback is not None and not isinstance(feedback, dict):
                raise TypeError(f"feedback must be a mapping, got {type(feedback).__name__}")
            game.feedback = Feedback(str(feedback["title"]), str(feedback["message"])) if feedback else None
            effect = data.get("effect") or {}
            if not isinstance(effect, dict):
                raise TypeError(f"effect must be a mapping, got {type(effect).__name__}")
            game.effect = FlagEffect(
                selected_position=int(effect.get("selected_position", NO_SELECTION)),
                rotation=float(effect.get("rotation", 0.0)),
                animating=bool(effect.get("animating", False)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise GameStateError(f"malformed game data: {e}") from e
        if not 0 <= game.correct_answer_position < CHOICES:
            raise GameStateError(f"malformed game data: correct position {game.correct_answer_position}")
        if not NO_SELECTION <= game.selected_position < CHOICES:
            raise GameStateError(f"malformed game data: selected position {game.selected_position}")
        return game

    def snapshot(self) -> Dict[str, Any]:
        """State as seen by a client re-rendering the screen."""
        data = self.to_dict()
        data.pop("countries")
        data.update(
            {
                "candidates": self.candidates,
                "prompt_country": self.prompt_country,
                "round_number": self.round_number,
                "total_rounds": self.total_rounds,
                "selected_position": self.selected_position,
                "is_finished": self.is_finished,
            }
        )
        return data
