import os

# Keep app imports off the on-disk default database.
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("APP_ENV", "test")
