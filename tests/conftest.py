"""Test environment: in-memory SQLite, fast bcrypt, fixed signing secret. Set before app modules import."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-signing-secret-0123456789abcdef"
os.environ["APP_ENV"] = "dev"
