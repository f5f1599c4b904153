# services/session_helper.py - load/store the game controller in the web session
from flask import current_app

from services.game_service import GameSession, GameStateError

GAME_KEY = "game"


def _log_event(event, game):
    current_app.logger.info(
        "game_event=%s round=%s score=%s state=%s", event, game.round_number, game.score, game.state.value
    )


class SessionHelper:
    @staticmethod
    def new_game(session, rng):
        game = GameSession.new(rng=rng, listeners=[_log_event])
        SessionHelper.save_game(session, game)
        return game

    @staticmethod
    def load_game(session, rng):
        """Return the session's game, starting a fresh one if missing or malformed."""
        data = session.get(GAME_KEY)
        if data is None:
            return SessionHelper.new_game(session, rng)
        try:
            game = GameSession.from_dict(data, rng=rng)
        except GameStateError as e:
            current_app.logger.warning("discarding_game_session reason=%s", e)
            return SessionHelper.new_game(session, rng)
        game.add_listener(_log_event)
        return game

    @staticmethod
    def save_game(session, game):
        session[GAME_KEY] = game.to_dict()
