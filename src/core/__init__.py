"""
Core domain models, mathematical primitives, and invariants.

This module contains the foundational building blocks of the Mallows model
core that are independent of the outer MCMC driver (metric identifiers,
rank-vector coercion, numerical safeguards, contracts, logging).
"""
