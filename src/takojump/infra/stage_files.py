from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from takojump.domain.config import StageConfig
from takojump.infra.exceptions import StageConfigDecodeError, StageConfigEncodeError
from takojump.infra.stage_codec import decode_stages, encode_stages

logger = logging.getLogger(__name__)


def load_stages_from_path(path: Path) -> tuple[StageConfig, ...]:
    try:
        data = path.read_text(encoding="utf-8")
        stages = decode_stages(json.loads(data))
        logger.info("loaded %d stages from %s", len(stages), path)
        return stages
    except StageConfigDecodeError:
        raise
    except Exception as e:
        raise StageConfigDecodeError(f"Failed to load stages from {path}: {e}") from e


def save_stages_to_path(stages: tuple[StageConfig, ...], path: Path) -> None:
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        payload = encode_stages(stages)
        text = json.dumps(payload, indent=2, sort_keys=True)
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, path)
        logger.info("saved %d stages to %s", len(stages), path)
    except Exception as e:
        try:
            if tmp.exists():
                tmp.unlink()
        except OSError:
            pass
        raise StageConfigEncodeError(f"Failed to save stages to {path}: {e}") from e
