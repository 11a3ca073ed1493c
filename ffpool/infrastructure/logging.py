import logging
from pathlib import Path
from typing import Optional

def setup_logging(log_path: Optional[Path] = None, debug: bool = False) -> logging.Logger:
    """
    Setup logging configuration for ffpool.

    Terminal output belongs to the console reporter, so records only go to a
    file when log_path is given and are dropped otherwise.

    Args:
        log_path: Optional path to log file (parent directories are created)
        debug: If True, enable DEBUG level logging including tool command lines
    """
    level = logging.DEBUG if debug else logging.INFO

    if log_path:
        log_file = Path(log_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers = [logging.FileHandler(log_file)]
    else:
        handlers = [logging.NullHandler()]

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True  # Override any existing configuration
    )

    logger = logging.getLogger("ffpool")
    logger.info(f"Logging initialized: {log_path or 'disabled'} (debug={'ON' if debug else 'OFF'})")

    return logger
