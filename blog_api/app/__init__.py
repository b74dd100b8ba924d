"""
Application package for the Blog Posts API.

``core`` holds configuration, logging and the request pipeline,
``schemas`` the pydantic payloads, ``services`` the in-memory post
store and ``api`` the HTTP routes.
"""

from .main import app  # noqa: F401
