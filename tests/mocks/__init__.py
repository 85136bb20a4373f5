"""
Centralized mock objects for testing.

This package provides reusable mock factories and fakes for transports,
registries and Starlette websockets.
"""
