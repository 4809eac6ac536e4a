"""Validation helpers shared by request models."""
