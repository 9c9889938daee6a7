"""Tests for the analysis client interface, disabled backend and quiz scoring.

Tests:
- Abstract method requirements
- Disabled backend constant results
- Async context manager protocol
- get_analysis_client factory
- score_quiz
"""

from abc import ABC
from unittest.mock import patch

import pytest

from shelf_analysis import (
    DISABLED_MESSAGE,
    AnalysisClient,
    DisabledAnalysisClient,
    get_analysis_client,
    score_quiz,
)
from shelf_contracts import QuizQuestion

pytestmark = pytest.mark.unit


class TestAnalysisClientInterface:
    """Tests for AnalysisClient abstract interface."""

    def test_is_abstract_base_class(self):
        """AnalysisClient is an ABC and cannot be instantiated."""
        assert issubclass(AnalysisClient, ABC)

        with pytest.raises(TypeError, match="abstract"):
            AnalysisClient()

    def test_abstract_methods_defined(self):
        """Every content operation is abstract."""
        abstract_methods = AnalysisClient.__abstractmethods__

        for name in (
            "analyze",
            "categorize",
            "summarize",
            "create_quiz",
            "analyze_sentiment",
            "extract_keywords",
            "translate",
            "generate_description",
            "generate_video_description",
            "extract_title",
            "generate_script",
            "suggest_content",
            "design_article",
            "rate_content",
            "is_available",
            "close",
            "backend",
        ):
            assert name in abstract_methods


class TestDisabledClient:
    """Tests for DisabledAnalysisClient."""

    @pytest.fixture
    def client(self):
        return DisabledAnalysisClient()

    async def test_analyze(self, client):
        result = await client.analyze("some text")

        assert result.analysis == DISABLED_MESSAGE
        assert result.categories == []

    async def test_summarize_streams_single_chunk(self, client):
        chunks = [chunk async for chunk in client.summarize("some text")]

        assert chunks == [DISABLED_MESSAGE]

    async def test_empty_list_operations(self, client):
        assert await client.categorize("x") == []
        assert await client.create_quiz("x", question_count=3) == []
        assert await client.extract_keywords("x") == []
        assert await client.suggest_content("x") == []

    async def test_sentiment(self, client):
        result = await client.analyze_sentiment("x")

        assert result.sentiment == "neutral"
        assert result.explanation == DISABLED_MESSAGE

    async def test_translate_targets(self, client):
        assert await client.translate("x") == "Translation is disabled."
        assert await client.translate("x", target="ar") == "الترجمة معطلة."

    async def test_translate_unknown_target(self, client):
        with pytest.raises(ValueError, match="Unsupported target"):
            await client.translate("x", target="fr")

    async def test_rate_content_zero_stars(self, client):
        review = await client.rate_content("x")

        assert "(0/5)" in review
        assert DISABLED_MESSAGE in review

    async def test_text_operations(self, client):
        assert await client.generate_description("x") == "Description generation is disabled."
        assert await client.generate_video_description("title") == "Description generation is disabled."
        assert await client.extract_title("x") == "Unknown title"
        assert await client.generate_script("t", "d") == DISABLED_MESSAGE
        assert await client.design_article("x") == DISABLED_MESSAGE

    async def test_not_available(self, client):
        assert await client.is_available() is False

    def test_backend(self, client):
        assert client.backend == "disabled"

    async def test_async_context_manager(self):
        """Exiting the context closes the client."""
        client = DisabledAnalysisClient()

        with patch.object(client, "close", wraps=client.close) as close:
            async with client as entered:
                assert entered is client
            close.assert_awaited_once()


class TestFactory:
    """Tests for get_analysis_client."""

    def test_disabled_backend(self):
        assert isinstance(get_analysis_client("disabled"), DisabledAnalysisClient)

    def test_default_from_settings(self):
        assert get_analysis_client().backend == "disabled"

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown backend"):
            get_analysis_client("gemini")


class TestScoreQuiz:
    """Tests for score_quiz."""

    @pytest.fixture
    def questions(self):
        return [
            QuizQuestion(question="Q1", options=["a", "b"], correct_answer_index=0),
            QuizQuestion(question="Q2", options=["a", "b", "c"], correct_answer_index=2),
            QuizQuestion(question="Q3", options=["a", "b"], correct_answer_index=1),
        ]

    def test_all_correct(self, questions):
        result = score_quiz(questions, [0, 2, 1])

        assert (result.score, result.total) == (3, 3)

    def test_partial_and_unanswered(self, questions):
        result = score_quiz(questions, [0, None, 0])

        assert (result.score, result.total) == (1, 3)

    def test_short_answer_list(self, questions):
        assert score_quiz(questions, [0]).score == 1

    def test_empty_quiz(self):
        result = score_quiz([], [])

        assert (result.score, result.total) == (0, 0)
