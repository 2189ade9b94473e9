"""Command-line client for the Buffer social media scheduling API."""

__version__ = "0.1.0"
