# File: chariot/api/endpoints/__init__.py
"""
API endpoints package for Chariot.

One module per resource family; both expose the same document and
translation routes.
"""

from chariot.api.endpoints import monsters, spells
