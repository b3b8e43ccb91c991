# src/noddit/core/__init__.py
"""Core configuration, logging and security helpers."""
