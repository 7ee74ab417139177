"""Parallel execution, retry and the generate/verify workflows."""
