"""Event Recipes Service.

A REST backend for planning events and attaching recipes to them.
"""

__version__ = "0.1.0"
