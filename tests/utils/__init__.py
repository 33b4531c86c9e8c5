"""
Test utilities for unwrapping tests.

This package provides exceptions, wrapper exceptions and helpers to raise and summarize them.
"""

# Re-export commonly used items for convenience
from tests.utils.errors import OtherWrapperError, TestError, WrapperError
from tests.utils.functions import caught, caused, hidden_throw, task_raising, throw
from tests.utils.summary import body, summary

__all__ = [
    # Errors
    "TestError",
    "WrapperError",
    "OtherWrapperError",
    # Functions
    "throw",
    "hidden_throw",
    "caught",
    "caused",
    "task_raising",
    # Summary
    "summary",
    "body",
]
