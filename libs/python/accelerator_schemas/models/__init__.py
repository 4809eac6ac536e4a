"""Pydantic models describing accelerator rows and agent outputs."""
