"""Noddit: posts, votes, subnoddits and followers over a relational store."""

__version__ = "0.1.0"
