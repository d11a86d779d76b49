"""
Shared test setup.

Settings are read once at import time, so the environment is fixed here before
any app module is imported: a test signing secret, an in-memory SQLite URL and
the cheapest bcrypt cost.
"""

import os

os.environ["JWT_SECRET"] = "test-signing-secret-0123456789abcdef"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ADMIN_ONLY_MUTATIONS"] = "false"
os.environ["APP_ENV"] = "dev"
