"""Pydantic schemas for the HTTP boundary."""
