"""Attention: a focus-session timer."""
