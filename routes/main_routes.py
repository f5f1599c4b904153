# routes/main_routes.py - game screen and state snapshot
from flask import Blueprint, current_app, jsonify, render_template, session

from services.game_service import GameState
from services.session_helper import SessionHelper

main_bp = Blueprint("main", __name__)


def game_rng():
    return current_app.extensions["game_rng"]


@main_bp.route("/", methods=["GET"])
def index():
    """Game screen: prompt, score, three flags and any pending dialog."""
    game = SessionHelper.load_game(session, game_rng())
    return render_template(
        "game.html",
        game=game,
        show_round_result=game.state is GameState.AWAITING_NEXT,
        show_final=game.state is GameState.FINISHED,
    )


@main_bp.route("/api/state", methods=["GET"])
def state():
    """JSON snapshot of the current game for client-side re-rendering."""
    game = SessionHelper.load_game(session, game_rng())
    return jsonify(game.snapshot())
