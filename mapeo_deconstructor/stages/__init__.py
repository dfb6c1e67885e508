"""Decomposition stages run by the pipeline."""
