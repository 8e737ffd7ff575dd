"""Concrete adapters for the interfaces in :mod:`rapport_vectorizer.interfaces`."""
