"""Version information for partialsum."""

__version__ = "0.1.0"
