from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def ensure_file(path: str, contents: str, *, dry_run: bool = False) -> bool:
    """Write ``contents`` to ``path`` unless it already holds exactly that.

    Returns True if the file was (or would be) written.
    """

    p = Path(path)
    try:
        if p.read_text(encoding="utf-8") == contents:
            logger.info("%s already up to date", str(p))
            return False
    except FileNotFoundError:
        pass

    if dry_run:
        logger.info("Would write %s", str(p))
        return True

    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(contents, encoding="utf-8")
    logger.info("Wrote %s", str(p))
    return True
