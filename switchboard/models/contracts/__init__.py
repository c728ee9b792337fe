"""Pydantic request/response and catalog models."""
