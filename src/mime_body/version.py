"""
Version constants for the MIME body parser.
"""

__version__ = "1.0.0"

# Reported alongside parse results (update when parsing behaviour changes)
PARSER_VERSION = f"mime-body-{__version__}"
