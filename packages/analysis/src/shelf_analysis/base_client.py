"""Abstract base class for content analysis backends.

Every AI-assisted feature of the library (summaries, quizzes, translations,
generated descriptions, ...) goes through this interface so the backend can
be swapped without touching callers.
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator, Literal

from shelf_contracts import AnalysisResult, QuizQuestion, SentimentResult

TargetLanguage = Literal["en", "ar"]


class AnalysisClient(ABC):
    """Abstract base for analysis backends.

    Implementations must provide every content operation plus
    ``is_available``, ``close`` and the ``backend`` identifier.

    Example:
        >>> async with get_analysis_client("disabled") as client:
        ...     result = await client.analyze(text)
        ...     print(result.analysis)
    """

    @abstractmethod
    async def analyze(self, content: str) -> AnalysisResult:
        """Produce a free-text analysis and suggested categories."""
        pass

    @abstractmethod
    async def categorize(self, content: str) -> list[str]:
        pass

    @abstractmethod
    def summarize(self, content: str) -> AsyncIterator[str]:
        """Stream a summary as text chunks.

        Implementations are async generators.
        """
        pass

    @abstractmethod
    async def create_quiz(self, content: str, question_count: int = 5) -> list[QuizQuestion]:
        pass

    @abstractmethod
    async def analyze_sentiment(self, content: str) -> SentimentResult:
        pass

    @abstractmethod
    async def extract_keywords(self, content: str) -> list[str]:
        pass

    @abstractmethod
    async def translate(self, content: str, target: TargetLanguage = "en") -> str:
        """Translate ``content`` to English (``"en"``) or Arabic (``"ar"``)."""
        pass

    @abstractmethod
    async def generate_description(self, content: str) -> str:
        pass

    @abstractmethod
    async def generate_video_description(self, title: str) -> str:
        pass

    @abstractmethod
    async def extract_title(self, content: str) -> str:
        pass

    @abstractmethod
    async def generate_script(self, title: str, description: str) -> str:
        """Write a video script from a title and description."""
        pass

    @abstractmethod
    async def suggest_content(self, content: str) -> list[str]:
        pass

    @abstractmethod
    async def design_article(self, content: str) -> str:
        pass

    @abstractmethod
    async def rate_content(self, content: str) -> str:
        """Return a markdown review with a star rating."""
        pass

    @abstractmethod
    async def is_available(self) -> bool:
        """Check if the backend can serve requests."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release backend resources."""
        pass

    @property
    @abstractmethod
    def backend(self) -> str:
        """Backend identifier (e.g. ``"disabled"``)."""
        pass

    async def __aenter__(self) -> "AnalysisClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
