"""CarePair appointment booking: form controller, validation and submission API."""

__version__ = "1.0.0"
