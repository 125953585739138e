"""Infrastructure: database, local store and repositories."""
