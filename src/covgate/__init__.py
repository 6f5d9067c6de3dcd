"""covgate — fail pull requests that regress test coverage."""

__version__ = "1.0.0"
