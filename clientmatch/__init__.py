"""Match MySQL client records with affordable products via Claude-generated SQL."""

__version__ = "0.1.0"