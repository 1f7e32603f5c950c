"""Root conftest: drops ambient ACCESS_LOG_* settings before any module imports."""
from __future__ import annotations

import os

for key in [k for k in os.environ if k.startswith("ACCESS_LOG_")]:
    del os.environ[key]
