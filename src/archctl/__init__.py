"""archctl — route feature requests to Clean Architecture responsibilities."""

__version__ = "0.3.0"
