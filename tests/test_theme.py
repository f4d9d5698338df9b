import os
import unittest
from unittest.mock import MagicMock, patch

import requests

from wordsearch.core.exceptions import ThemeWordError
from wordsearch.core.levels import WORLD_THEMES
from wordsearch.data.theme import (
    BuiltinThemeWordGenerator,
    GeminiThemeWordGenerator,
    ThemeOutput,
    ThemeWord,
    UserWordListGenerator,
    merge_theme_generators,
)
from wordsearch.io.gemini_client import GeminiAPIError, GeminiSettings, GeminiWordClient


class ThemeOutputTests(unittest.TestCase):
    def test_defaults(self) -> None:
        out = ThemeOutput()
        self.assertEqual(out.words, [])
        self.assertIsNone(out.title)

    def test_texts(self) -> None:
        out = ThemeOutput(words=[ThemeWord("CHAT", "user"), ThemeWord("LOUP", "builtin")])
        self.assertEqual(out.texts(), ["CHAT", "LOUP"])


class UserWordListGeneratorTests(unittest.TestCase):
    def test_cleans_words(self) -> None:
        gen = UserWordListGenerator(["  éléphant ", "", "ours-brun"])
        out = gen.generate("animals")
        self.assertEqual(out.texts(), ["ELEPHANT", "OURSBRUN"])
        self.assertTrue(all(entry.source == "user" for entry in out.words))


class BuiltinThemeWordGeneratorTests(unittest.TestCase):
    def test_known_theme(self) -> None:
        gen = BuiltinThemeWordGenerator(seed=1)
        out = gen.generate("Animals", limit=5)
        self.assertEqual(len(out.words), 5)
        self.assertTrue(all(entry.source == "builtin" for entry in out.words))

    def test_unknown_theme_raises(self) -> None:
        gen = BuiltinThemeWordGenerator()
        with self.assertRaises(ThemeWordError):
            gen.generate("astrophysics")

    def test_every_level_theme_has_words(self) -> None:
        gen = BuiltinThemeWordGenerator(seed=2)
        for themes in WORLD_THEMES:
            for theme in themes:
                self.assertTrue(gen.generate(theme, limit=5).words, theme)

    def test_mixed_draws_from_all_buckets(self) -> None:
        gen = BuiltinThemeWordGenerator({"a": ["chat"], "b": ["pomme"]}, seed=0)
        self.assertEqual(sorted(gen.generate("Mixed").texts()), ["CHAT", "POMME"])

    def test_custom_buckets(self) -> None:
        gen = BuiltinThemeWordGenerator({"Fruits": ["pomme", "poire"]}, seed=0)
        self.assertEqual(gen.themes(), ["fruits"])
        self.assertEqual(sorted(gen.generate("fruits").texts()), ["POIRE", "POMME"])


class GeminiThemeWordGeneratorTests(unittest.TestCase):
    def test_cleans_returned_words(self) -> None:
        client = MagicMock()
        client.request_words.return_value = ["Dauphin", "", "baleine", "42"]
        gen = GeminiThemeWordGenerator(client=client)
        out = gen.generate("ocean", limit=10, difficulty="easy")
        self.assertEqual(out.texts(), ["DAUPHIN", "BALEINE"])
        self.assertTrue(all(entry.source == "gemini" for entry in out.words))
        prompt, limit = client.request_words.call_args[0]
        self.assertEqual(limit, 10)
        self.assertIn("ocean", prompt)
        self.assertIn("4 to 6 letters", prompt)

    def test_unknown_difficulty_uses_medium_lengths(self) -> None:
        client = MagicMock()
        client.request_words.return_value = []
        GeminiThemeWordGenerator(client=client).generate("x", difficulty="legendary")
        self.assertIn("5 to 8 letters", client.request_words.call_args[0][0])

    def test_empty_response(self) -> None:
        client = MagicMock()
        client.request_words.return_value = []
        self.assertEqual(GeminiThemeWordGenerator(client=client).generate("x").words, [])


class MergeThemeGeneratorsTests(unittest.TestCase):
    def test_primary_then_fallback_deduplicated(self) -> None:
        primary = UserWordListGenerator(["chat", "loup"])
        fallback = UserWordListGenerator(["LOUP", "ours", "lion"])
        out = merge_theme_generators(primary, [fallback], "animals", target=3)
        self.assertEqual(out.texts(), ["CHAT", "LOUP", "OURS"])

    def test_failing_generator_is_skipped(self) -> None:
        failing = MagicMock()
        failing.generate.side_effect = GeminiAPIError("boom")
        fallback = UserWordListGenerator(["chat"])
        out = merge_theme_generators(failing, [fallback], "animals", target=5)
        self.assertEqual(out.texts(), ["CHAT"])

    def test_no_sources(self) -> None:
        out = merge_theme_generators(None, [], "animals", target=5)
        self.assertEqual(out.words, [])


def gemini_response(status: int = 200, body=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.text = text
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


def words_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class GeminiSettingsTests(unittest.TestCase):
    def test_missing_key(self) -> None:
        with self.assertRaises(GeminiAPIError):
            GeminiSettings.from_env({})
        with self.assertRaises(GeminiAPIError):
            GeminiSettings.from_env({"GEMINI_API_KEY": "  "})

    def test_model_override(self) -> None:
        settings = GeminiSettings.from_env({"GEMINI_API_KEY": "secret", "GEMINI_MODEL": "gemini-pro"})
        self.assertEqual(settings.api_key, "secret")
        self.assertEqual(settings.model, "gemini-pro")

    def test_client_reads_process_environment(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(GeminiAPIError):
                GeminiWordClient(session=MagicMock())

    def test_api_error_is_a_theme_word_error(self) -> None:
        self.assertTrue(issubclass(GeminiAPIError, ThemeWordError))


class GeminiWordClientTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = MagicMock()
        self.client = GeminiWordClient(
            GeminiSettings(api_key="secret", retry_delay=0.0), session=self.session
        )

    def test_request_words(self) -> None:
        self.session.post.return_value = gemini_response(body=words_body('["chat", "loup", 3, "ours"]'))
        self.assertEqual(self.client.request_words("prompt", 2), ["chat", "loup"])
        args, kwargs = self.session.post.call_args
        self.assertIn("gemini-2.5-flash:generateContent", args[0])
        self.assertEqual(kwargs["headers"], {"x-goog-api-key": "secret"})
        self.assertEqual(kwargs["json"]["contents"][0]["parts"][0]["text"], "prompt")
        self.assertEqual(kwargs["json"]["generationConfig"]["responseMimeType"], "application/json")
        self.assertEqual(kwargs["timeout"], 30.0)

    def test_fenced_array_is_accepted(self) -> None:
        self.session.post.return_value = gemini_response(body=words_body('```json\n["chat"]\n```'))
        self.assertEqual(self.client.request_words("prompt", 5), ["chat"])

    def test_retries_once_on_unavailable(self) -> None:
        self.session.post.side_effect = [
            gemini_response(status=503, text="busy"),
            gemini_response(body=words_body('["chat"]')),
        ]
        self.assertEqual(self.client.request_words("prompt", 5), ["chat"])
        self.assertEqual(self.session.post.call_count, 2)

    def test_gives_up_after_retries(self) -> None:
        self.session.post.return_value = gemini_response(status=429, body=ValueError("no json"), text="slow down")
        with self.assertRaisesRegex(GeminiAPIError, "HTTP 429: slow down"):
            self.client.request_words("prompt", 5)
        self.assertEqual(self.session.post.call_count, 2)

    def test_error_message_from_body(self) -> None:
        self.session.post.return_value = gemini_response(
            status=400, body={"error": {"message": "API key not valid"}}
        )
        with self.assertRaisesRegex(GeminiAPIError, "API key not valid"):
            self.client.request_words("prompt", 5)
        self.assertEqual(self.session.post.call_count, 1)

    def test_request_errors_are_wrapped(self) -> None:
        self.session.post.side_effect = requests.ConnectionError("down")
        with self.assertRaises(GeminiAPIError):
            self.client.request_words("prompt", 5)

    def test_blocked_prompt(self) -> None:
        self.session.post.return_value = gemini_response(
            body={"candidates": [], "promptFeedback": {"blockReason": "SAFETY"}}
        )
        with self.assertRaisesRegex(GeminiAPIError, "SAFETY"):
            self.client.request_words("prompt", 5)

    def test_missing_candidates(self) -> None:
        self.session.post.return_value = gemini_response(body={"candidates": []})
        with self.assertRaises(GeminiAPIError):
            self.client.request_words("prompt", 5)

    def test_answer_must_be_an_array(self) -> None:
        self.session.post.return_value = gemini_response(body=words_body('{"word": "chat"}'))
        with self.assertRaisesRegex(GeminiAPIError, "array"):
            self.client.request_words("prompt", 5)
        self.session.post.return_value = gemini_response(body=words_body("chat, loup"))
        with self.assertRaisesRegex(GeminiAPIError, "not valid JSON"):
            self.client.request_words("prompt", 5)


if __name__ == "__main__":
    unittest.main()
