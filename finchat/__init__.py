"""finchat - personal finance tracker with a chat assistant."""

__version__ = "1.0.0"
