"""
Infrastructure layer package for the SIGma authentication service.
Provides the async database connection manager and repository base.
"""

__all__ = []
