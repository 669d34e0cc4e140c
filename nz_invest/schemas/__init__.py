"""Pydantic request and response contracts."""
