"""Core pipeline: extraction, settings and orchestration."""
