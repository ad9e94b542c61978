"""Lions Forum: a discussion forum with cookie sessions and a vote ledger."""

__version__ = "1.0.0"
