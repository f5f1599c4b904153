"""Functional page-by-page verification script.
Run inside the virtual environment:
  python functional_check.py
Plays one full game with a seeded random source and outputs a tuple of
(status_code, heuristic_content_ok) per step.
"""

from app import create_app
from services.game_service import MAX_ROUNDS


def run_checks():
    app = create_app({"TESTING": True, "WTF_CSRF_ENABLED": False, "GAME_RANDOM_SEED": 7})
    results = {}
    with app.test_client() as c:
        # Home creates a game at round 0
        r = c.get("/")
        results["home"] = (r.status_code, "Tap the flag of:" in r.get_data(as_text=True))

        # State snapshot
        s = c.get("/api/state")
        data = s.get_json() or {}
        results["state"] = (s.status_code, data.get("round_number") == 1)

        # Answer every round, always tapping the correct flag
        last = None
        for _ in range(MAX_ROUNDS + 1):
            correct = c.get("/api/state").get_json()["correct_answer_position"]
            last = c.post("/answer", data={"position": correct}, follow_redirects=True)
            if "Next question" in last.get_data(as_text=True):
                c.post("/next", follow_redirects=True)
        body = last.get_data(as_text=True) if last is not None else ""
        results["game_finished"] = (
            last.status_code if last is not None else 0,
            "finished the game" in body and f"Your score is {MAX_ROUNDS + 1}" in body,
        )

        # New game
        reset = c.post("/reset", follow_redirects=True)
        final = c.get("/api/state").get_json() or {}
        results["new_game"] = (reset.status_code, final.get("score") == 0 and final.get("round_number") == 1)

        # Health check
        h = c.get("/healthz")
        results["healthz"] = (h.status_code, (h.get_json() or {}).get("status") == "ok")

        # Missing page
        nf = c.get("/does-not-exist")
        results["404"] = (nf.status_code, nf.status_code == 404)

    return results


if __name__ == "__main__":
    for name, (status, ok) in run_checks().items():
        print(f"{name:15} {status} {'OK' if ok else 'CHECK'}")
