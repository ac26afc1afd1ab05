"""Core models for modplan."""
