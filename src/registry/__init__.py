"""Artifact repository clients."""
