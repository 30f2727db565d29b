"""Endzone Trades - fair trade recommendations for Sleeper fantasy football leagues."""

__version__ = "0.1.0"
