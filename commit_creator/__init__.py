"""Automated single-commit workflow driven by an external review agent."""
