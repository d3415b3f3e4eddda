"""Gatekeeper data, QA memory client, prompt rendering, replay reports and runner control."""

__version__ = "0.1.0"