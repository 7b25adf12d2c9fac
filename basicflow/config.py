import logging
import sys

# ------------------------------
# Config (defaults; no flags)
# ------------------------------
MOUNT_ID = "root"          # element the page takes over
DIAGRAM_ID = "diagram"
DELETE_KEY_CODE = 46       # 'delete'-key

ZOOM_STEP = 1.2
MIN_ZOOM = 0.2
MAX_ZOOM = 2
GRID_SIZE = 16             # background dot spacing in px

DEBUG = True

LOGGER_NAME = "basicflow"


def configure_logging(verbose=False):
    """
    Attaches a single stderr handler to the package logger.
    Calling it again only changes the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.propagate = False
    return logger
