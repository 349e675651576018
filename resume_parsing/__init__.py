"""Rule-based extraction of portfolio fields from decoded resume text."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
