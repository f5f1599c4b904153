# routes/game_routes.py - handles flag taps and dialog acknowledgements
from flask import Blueprint, current_app, flash, redirect, request, session, url_for

from routes.main_routes import game_rng
from services.game_service import GameStateError, InvalidSelectionError
from services.session_helper import SessionHelper

game_bp = Blueprint("game", __name__)


@game_bp.route("/answer", methods=["POST"])
def answer():
    """Score the tapped flag, then redirect back to the game screen (PRG)."""
    game = SessionHelper.load_game(session, game_rng())

    raw = request.form.get("position", "")
    try:
        position = int(raw)
    except ValueError:
        flash("Please tap one of the flags.", "error")
        return redirect(url_for("main.index"))

    try:
        outcome = game.select_answer(position)
    except InvalidSelectionError:
        current_app.logger.warning("invalid_position position=%s", raw)
        flash("Please tap one of the flags.", "error")
        return redirect(url_for("main.index"))
    except GameStateError:
        flash("This question has already been answered.", "info")
        return redirect(url_for("main.index"))

    SessionHelper.save_game(session, game)
    current_app.logger.info(
        "answer position=%s correct=%s score=%s finished=%s", position, outcome.correct, game.score, outcome.finished
    )
    return redirect(url_for("main.index"))


@game_bp.route("/next", methods=["POST"])
def next_question():
    """Dismiss the round result dialog and ask the next question."""
    game = SessionHelper.load_game(session, game_rng())
    try:
        game.acknowledge()
    except GameStateError:
        flash("Answer the current question first.", "info")
        return redirect(url_for("main.index"))
    SessionHelper.save_game(session, game)
    return redirect(url_for("main.index"))


@game_bp.route("/reset", methods=["POST"])
def reset():
    """Start a new game from the final score dialog."""
    game = SessionHelper.load_game(session, game_rng())
    try:
        game.reset_game()
    except GameStateError:
        flash("Finish the current game before starting a new one.", "info")
        return redirect(url_for("main.index"))
    SessionHelper.save_game(session, game)
    return redirect(url_for("main.index"))
