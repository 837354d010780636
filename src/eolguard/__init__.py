"""eolguard — line-ending checks for git commits."""

__version__ = "0.1.0"
