import random
import unittest

from app import create_app
from services.flag_assets import flag_filename, flag_slug
from services.game_service import COUNTRIES


class FlagQuizAppTestCase(unittest.TestCase):
    def setUp(self):
        self.app = create_app({"TESTING": True})
        self.client = self.app.test_client()
        self.app_context = self.app.app_context()
        self.app_context.push()

    def tearDown(self):
        self.app_context.pop()

    def test_healthz(self):
        response = self.client.get("/healthz")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {"status": "ok"})

    def test_not_found_page(self):
        response = self.client.get("/nope")
        self.assertEqual(response.status_code, 404)
        self.assertIn(b"404", response.data)

    def test_security_headers(self):
        response = self.client.get("/")
        self.assertEqual(response.headers.get("X-Frame-Options"), "DENY")
        self.assertEqual(response.headers.get("X-Content-Type-Options"), "nosniff")
        self.assertIn("default-src 'self'", response.headers.get("Content-Security-Policy", ""))

    def test_state_endpoint_returns_json(self):
        response = self.client.get("/api/state")
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertEqual(len(data["candidates"]), 3)
        self.assertIn(data["prompt_country"], data["candidates"])
        self.assertEqual(data["score"], 0)

    def test_game_rng_is_registered(self):
        self.assertIsInstance(self.app.extensions["game_rng"], random.Random)

    def test_seeded_apps_deal_identical_games(self):
        first = create_app({"TESTING": True, "GAME_RANDOM_SEED": 99}).test_client()
        second = create_app({"TESTING": True, "GAME_RANDOM_SEED": 99}).test_client()
        self.assertEqual(first.get("/api/state").get_json(), second.get("/api/state").get_json())

    def test_flag_url_filter(self):
        with self.app.test_request_context():
            url = self.app.jinja_env.filters["flag_url"]("Estonia")
        self.assertEqual(url, "/static/flags/estonia.svg")

    def test_flag_assets_cover_catalog(self):
        for country in COUNTRIES:
            self.assertTrue(flag_filename(country).startswith("flags/"))
        self.assertEqual(flag_slug(" United Kingdom "), "united-kingdom")


class CSRFEnabledTestCase(unittest.TestCase):
    def setUp(self):
        self.app = create_app({"TESTING": True, "WTF_CSRF_ENABLED": True})
        self.client = self.app.test_client()

    def test_answer_without_token_is_rejected(self):
        self.client.get("/")
        response = self.client.post("/answer", data={"position": 0}, follow_redirects=True)
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"session expired or the form is invalid", response.data)
        self.assertEqual(self.client.get("/api/state").get_json()["score"], 0)


if __name__ == "__main__":
    unittest.main()
