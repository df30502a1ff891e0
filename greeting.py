"""Minimal package entry used to demonstrate publishing with GitHub App auth."""


def greet(name: str = "World") -> str:
    """Return a greeting for the given name."""
    return f"Hello, {name}! This package was published using GitHub App authentication."
