"""Shared models, configuration, logging and helpers."""
