"""
Shared test assets for the app analytics engine.

Includes:
- Cleaned app and review CSV fixtures (tests/fixtures)
"""
