"""LLM-backed analysis of a project report: resume and technology tags.

Both operations are single blocking chat completions with a fixed system
instruction and the report text as the user message.  Neither raises on a
service failure.  Each returns an explicit result whose ``outcome`` tells
the caller whether the call failed (``FAILED``), succeeded with nothing
usable (``EMPTY``) or succeeded (``OK``).
"""

from __future__ import annotations

from rapport_vectorizer.interfaces.llm_provider import ILLMProvider
from rapport_vectorizer.models.report import CallOutcome, ResumeResult, TechnologiesResult
from rapport_vectorizer.services.text_splitter import truncate_at_word_boundary
from rapport_vectorizer.utils.errors import LLMError
from rapport_vectorizer.utils.logging import get_logger

_RESUME_SYSTEM_PROMPT = """You are a technical analyst specialized in analyzing final year project reports.
Create a concise resume of the project with the following structure:
1. Project Overview (2-3 sentences)
2. Main Objectives (bullet points)
3. Technologies Used (only mention technologies from the Technologies enum)
4. Key Features Implemented (bullet points)
5. Methodology/Approach (2-3 sentences)
6. Results and Outcomes (2-3 sentences)

Keep the resume focused and technical. Return the response in a clean markdown format."""

_TECHNOLOGIES_SYSTEM_PROMPT = (
    "You are a technical analyzer. From the given text, identify technologies mentioned. "
    "Return only the technology names that match the Technologies enum in the format: "
    "TECHNOLOGY_NAME,ANOTHER_TECHNOLOGY. If no valid technologies are found, "
    "return an empty string."
)


def parse_technologies(raw: str) -> list[str]:
    """Parse a comma-separated model answer into an ordered tag list.

    Blank entries are dropped, surrounding whitespace is stripped, and
    duplicates are removed keeping the first occurrence.  Values are not
    checked against any enum; the database enforces that.
    """
    seen: set[str] = set()
    technologies: list[str] = []
    for part in raw.split(","):
        tag = part.strip()
        if tag and tag not in seen:
            seen.add(tag)
            technologies.append(tag)
    return technologies


class ReportAnalyzer:
    """Summarizes a report and lists the technologies it mentions.

    Parameters
    ----------
    llm:
        The chat-completion provider.
    temperature:
        Sampling temperature for both calls.
    summary_max_tokens:
        Output bound for the resume.  Tag extraction is left unbounded.
    max_input_chars:
        When positive, the report text is cut at a word boundary to at most
        this many characters before it is sent.  ``0`` sends everything.
    """

    def __init__(
        self,
        llm: ILLMProvider,
        temperature: float = 0.3,
        summary_max_tokens: int = 1000,
        max_input_chars: int = 0,
    ) -> None:
        self._llm = llm
        self._temperature = temperature
        self._summary_max_tokens = summary_max_tokens
        self._max_input_chars = max_input_chars
        self._logger = get_logger(__name__)

    async def summarize(self, text: str) -> ResumeResult:
        """Generate the markdown resume of the report."""
        try:
            content = await self._llm.complete(
                system_prompt=_RESUME_SYSTEM_PROMPT,
                user_prompt=self._prepare_input(text),
                temperature=self._temperature,
                max_tokens=self._summary_max_tokens,
            )
        except LLMError as exc:
            self._logger.error("resume_generation_failed", error=str(exc))
            return ResumeResult(outcome=CallOutcome.FAILED, error=str(exc))

        resume = content.strip()
        if not resume:
            self._logger.warning("resume_generation_empty")
            return ResumeResult(outcome=CallOutcome.EMPTY)

        self._logger.info("resume_generated", chars=len(resume))
        return ResumeResult(outcome=CallOutcome.OK, resume=resume)

    async def extract_technologies(self, text: str) -> TechnologiesResult:
        """List the technologies the report mentions."""
        try:
            content = await self._llm.complete(
                system_prompt=_TECHNOLOGIES_SYSTEM_PROMPT,
                user_prompt=self._prepare_input(text),
                temperature=self._temperature,
            )
        except LLMError as exc:
            self._logger.error("technology_extraction_failed", error=str(exc))
            return TechnologiesResult(outcome=CallOutcome.FAILED, error=str(exc))

        technologies = parse_technologies(content)
        if not technologies:
            self._logger.info("technology_extraction_empty")
            return TechnologiesResult(outcome=CallOutcome.EMPTY)

        self._logger.info("technologies_extracted", technologies=technologies)
        return TechnologiesResult(outcome=CallOutcome.OK, technologies=technologies)

    def _prepare_input(self, text: str) -> str:
        prepared = truncate_at_word_boundary(text, self._max_input_chars)
        if len(prepared) < len(text):
            self._logger.info(
                "llm_input_truncated",
                original_chars=len(text),
                sent_chars=len(prepared),
            )
        return prepared
