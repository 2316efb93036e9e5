"""
Service layer - Stable access point for user operations.
"""
