"""
Core infrastructure for the Wayfinder API: configuration-bound database access,
error types and handlers, logging, credential checks and geometry.
"""
