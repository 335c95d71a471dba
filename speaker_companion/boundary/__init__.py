"""External system adapters: database, job stores, remote HTTP API."""
