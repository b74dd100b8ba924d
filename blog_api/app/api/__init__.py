"""
API package.

``router`` aggregates the domain routers under ``/api``; each module
in ``endpoints`` defines the routes for one resource.
"""
