"""
repositories/ - Data Access Layer
==================================
DatabaseRepo declares the read operations callers rely on; PostgresDBRepo
implements them with hand-written SQL and returns domain model objects.
"""
