"""Client toolkit for the quiz platform: API client, attempt engine and front ends."""

__version__ = "0.4.0"
