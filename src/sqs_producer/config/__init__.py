"""
Module: config
Description: Application settings loaded from the environment.
"""

__all__ = []
