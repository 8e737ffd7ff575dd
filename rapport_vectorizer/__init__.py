"""rapport-vectorizer: summarize, tag and vectorize uploaded project reports."""

__version__ = "0.1.0"
