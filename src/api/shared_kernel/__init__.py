"""Shared kernel.

Value objects shared by every bounded context. Nothing here may import
from a bounded context.
"""
