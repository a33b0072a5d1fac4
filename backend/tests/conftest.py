"""Shared test configuration.

Environment is set before any `auctionhouse` import so the settings, the
database engine and the login rate limit pick it up.
"""

import os
import sys
import tempfile

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

_db_dir = tempfile.mkdtemp(prefix="auctionhouse-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["LOGIN_RATE_LIMIT"] = "1000/minute"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "adminpassword"
