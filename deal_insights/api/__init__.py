"""
HTTP API for the deal insights backend.
"""
