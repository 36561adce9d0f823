"""Example studies."""
