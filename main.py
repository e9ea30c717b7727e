"""
main.py
-------
Entry point for the movie catalog data access layer.

Responsibilities:
    - Create the database connection pool once.
    - Inject it into the PostgreSQL repository.
    - Check connectivity and list the catalog.
"""

from db.connection import close_pool, create_pool, ping
from repositories.base import DatabaseRepo
from repositories.postgres_repo import PostgresDBRepo
from utils.logger import get_logger

logger = get_logger(__name__)


def list_catalog(repo: DatabaseRepo) -> int:
    """Log every movie title and return how many there are."""
    movies = repo.all_movies()
    logger.info(f"Catalog contains {len(movies)} movie(s).")
    for movie in movies:
        logger.info(f"  {movie}")
    return len(movies)


def main() -> None:
    """Build the pool and repository, then list the catalog."""
    db_pool = create_pool()
    try:
        repo = PostgresDBRepo(db_pool)
        ping(repo.connection())
        logger.info("Database is reachable.")
        list_catalog(repo)
    finally:
        close_pool(db_pool)


if __name__ == "__main__":
    main()
