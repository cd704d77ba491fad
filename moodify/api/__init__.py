"""
API Package

FastAPI backend and request logging middleware.
"""
