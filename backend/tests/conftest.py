"""Test-wide environment: SQLite instead of PostgreSQL, uploads in a temp directory.

Must run before ``blog_cms.config.get_settings`` is first called.
"""

import os
import tempfile
from pathlib import Path

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("UPLOAD_DIR", str(Path(tempfile.gettempdir()) / "blog_cms_test_uploads"))
os.environ.setdefault("APP_ENV", "test")
