"""Voting, scoring and ranking core for a community discussion forum."""

__version__ = "0.1.0"
