"""Command line interface for partialsum."""
