"""
db/ - Database Layer
====================
Handles the PostgreSQL connection pool used by the repositories.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
