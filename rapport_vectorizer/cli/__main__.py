"""Allow ``python -m rapport_vectorizer.cli`` execution."""

import sys

from rapport_vectorizer.cli.process import main

sys.exit(main())
