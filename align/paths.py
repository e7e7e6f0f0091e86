from __future__ import annotations

import os
from pathlib import Path

APP_ENV_CONFIG = "ALIGN_CONFIG_DIR"


def project_root() -> Path:
    """
    Repository/project root directory.
    Contains align/, api/, cli/, config/.
    """
    return Path(__file__).parent.parent.resolve()


def config_dir() -> Path:
    """
    Directory holding governor.yaml.
    Override with ALIGN_CONFIG_DIR.
    """
    if os.environ.get(APP_ENV_CONFIG):
        return Path(os.environ[APP_ENV_CONFIG]).expanduser().resolve()
    return project_root() / "config"
