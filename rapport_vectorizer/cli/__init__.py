"""CLI tools for rapport-vectorizer.

- ``python -m rapport_vectorizer.cli event`` -- replay a saved storage notification
- ``python -m rapport_vectorizer.cli s3`` -- process an object already in the bucket
- ``python -m rapport_vectorizer.cli pdf`` -- analyze a local PDF (dry run)
- ``python -m rapport_vectorizer.cli split`` -- print word-wrapped text segments
"""
