"""Write result documents for the front end."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel

logger = logging.getLogger(__name__)


def write_document(document: BaseModel, path: Path) -> Path:
    """Serialise ``document`` as indented JSON, replacing any previous file at ``path``."""

    path.parent.mkdir(parents=True, exist_ok=True)
    payload = document.model_dump_json(by_alias=True, indent=2)
    path.write_text(payload, encoding="utf-8")
    logger.info("Saved to %s", path)
    return path
