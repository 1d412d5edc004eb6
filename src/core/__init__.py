"""Configuration and authentication dependencies."""
