"""
Service layer abstraction.

Services encapsulate business logic.  By isolating it here the
in-memory collection can later be swapped for a database without
changing API handlers.
"""
