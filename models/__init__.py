"""
models/ - Domain Models
=======================
Plain dataclasses materialized from database rows by the repositories.
"""
