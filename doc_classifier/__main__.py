"""
Entry point for running the classifier CLI as a module: python -m doc_classifier
"""

import sys
from doc_classifier.cli import main

if __name__ == "__main__":
    sys.exit(main())
