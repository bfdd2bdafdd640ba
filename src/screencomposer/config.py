"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded template paths scattered through the
   controllers and views.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find the template images when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    MEDIA_PATH (str): Absolute path to the directory holding the template backgrounds.
"""
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: config.py is in src/screencomposer/
    project_root: Path = Path(__file__).parent.parent.parent
    return os.path.join(str(project_root), relative_path)


ASSETS_PATH: str = get_resource_path("assets")
MEDIA_PATH: str = os.path.join(ASSETS_PATH, "media")

if not os.path.isdir(MEDIA_PATH):
    logger.warning(f"Template media directory not found at {MEDIA_PATH}")
