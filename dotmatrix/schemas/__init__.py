"""Schemas — Pydantic models for API boundaries and service results."""
