"""
Pure calculation functions for the analytics engine.
No IO, no shared state - every function takes plain sequences and returns plain dicts.
"""
