"""Local processing services: text segmentation, PDF extraction, LLM analysis."""

from rapport_vectorizer.services.pdf_extractor import PDFTextExtractor
from rapport_vectorizer.services.report_analyzer import ReportAnalyzer, parse_technologies
from rapport_vectorizer.services.text_splitter import split_text, truncate_at_word_boundary

__all__ = [
    "PDFTextExtractor",
    "ReportAnalyzer",
    "parse_technologies",
    "split_text",
    "truncate_at_word_boundary",
]
