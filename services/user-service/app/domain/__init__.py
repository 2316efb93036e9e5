"""
Domain layer - Core business entities.

This layer contains the fundamental business objects,
independent of any infrastructure or framework concerns.
"""
