"""
Pydantic schema definitions for API payloads.

Schemas are separated from the store so the JSON representation can
evolve independently of how posts are held in memory.
"""
