"""Analysis backend that reports every feature as disabled.

Each operation returns immediately with a constant result and never
raises, so callers can be wired to the full interface today.
"""

from typing import AsyncIterator

from shelf_common import get_logger
from shelf_contracts import AnalysisResult, QuizQuestion, SentimentResult

from shelf_analysis.base_client import AnalysisClient, TargetLanguage

logger = get_logger(__name__)

DISABLED_MESSAGE = "AI analysis features are currently disabled."

_TRANSLATION_DISABLED = {
    "en": "Translation is disabled.",
    "ar": "الترجمة معطلة.",
}


class DisabledAnalysisClient(AnalysisClient):
    """Constant "feature disabled" results for every operation."""

    def _disabled(self, operation: str) -> None:
        logger.warning("analysis_disabled", operation=operation)

    async def analyze(self, content: str) -> AnalysisResult:
        self._disabled("analyze")
        return AnalysisResult(analysis=DISABLED_MESSAGE, categories=[])

    async def categorize(self, content: str) -> list[str]:
        self._disabled("categorize")
        return []

    async def summarize(self, content: str) -> AsyncIterator[str]:
        self._disabled("summarize")
        yield DISABLED_MESSAGE

    async def create_quiz(self, content: str, question_count: int = 5) -> list[QuizQuestion]:
        self._disabled("create_quiz")
        return []

    async def analyze_sentiment(self, content: str) -> SentimentResult:
        self._disabled("analyze_sentiment")
        return SentimentResult(sentiment="neutral", explanation=DISABLED_MESSAGE)

    async def extract_keywords(self, content: str) -> list[str]:
        self._disabled("extract_keywords")
        return []

    async def translate(self, content: str, target: TargetLanguage = "en") -> str:
        self._disabled("translate")
        if target not in _TRANSLATION_DISABLED:
            raise ValueError(f"Unsupported target language: {target}. Use 'en' or 'ar'.")
        return _TRANSLATION_DISABLED[target]

    async def generate_description(self, content: str) -> str:
        self._disabled("generate_description")
        return "Description generation is disabled."

    async def generate_video_description(self, title: str) -> str:
        self._disabled("generate_video_description")
        return "Description generation is disabled."

    async def extract_title(self, content: str) -> str:
        self._disabled("extract_title")
        return "Unknown title"

    async def generate_script(self, title: str, description: str) -> str:
        self._disabled("generate_script")
        return DISABLED_MESSAGE

    async def suggest_content(self, content: str) -> list[str]:
        self._disabled("suggest_content")
        return []

    async def design_article(self, content: str) -> str:
        self._disabled("design_article")
        return DISABLED_MESSAGE

    async def rate_content(self, content: str) -> str:
        self._disabled("rate_content")
        return (
            "### Content rating\n\n"
            "**Rating:** ☆☆☆☆☆ (0/5)\n\n"
            f"**Review:**\n{DISABLED_MESSAGE}"
        )

    async def is_available(self) -> bool:
        return False

    async def close(self) -> None:
        """Nothing to release."""
        pass

    @property
    def backend(self) -> str:
        return "disabled"
