from __future__ import annotations

from dataclasses import asdict, fields
from typing import Any

from takojump.domain.config import StageConfig
from takojump.infra.exceptions import StageConfigDecodeError, StageConfigEncodeError


_FORMAT = "takojump.stages"
_VERSION_LATEST = 1

_INT_FIELDS = ("platform_count", "block_count_min", "block_count_max", "hazard_count")
_FLOAT_FIELDS = (
    "total_height",
    "first_platform_gap",
    "gap_min",
    "gap_max",
    "normal_ratio",
    "ice_ratio",
    "conveyor_ratio",
    "water_speed",
    "water_delay",
    "base_time",
)


def encode_stages(stages: tuple[StageConfig, ...]) -> dict:
    try:
        return {
            "format": _FORMAT,
            "version": _VERSION_LATEST,
            "stages": [asdict(s) for s in stages],
        }
    except Exception as e:
        raise StageConfigEncodeError(f"Failed to encode stages: {e}") from e


def decode_stages(obj: dict) -> tuple[StageConfig, ...]:
    try:
        if obj.get("format") != _FORMAT:
            raise StageConfigDecodeError("Invalid stage table format marker.")

        ver = obj.get("version")
        if ver == 1:
            return _decode_v1(obj)

        raise StageConfigDecodeError("Unsupported stage table version.")
    except StageConfigDecodeError:
        raise
    except Exception as e:
        raise StageConfigDecodeError(f"Failed to decode stages: {e}") from e


def _decode_v1(obj: dict) -> tuple[StageConfig, ...]:
    raw_stages = obj.get("stages")
    if not isinstance(raw_stages, list) or not raw_stages:
        raise StageConfigDecodeError("stages must be a non-empty list.")

    known = {f.name for f in fields(StageConfig)}
    parsed: list[StageConfig] = []
    for i, rs in enumerate(raw_stages):
        if not isinstance(rs, dict):
            raise StageConfigDecodeError(f"stages[{i}] must be an object.")

        unknown = set(rs) - known
        if unknown:
            raise StageConfigDecodeError(f"stages[{i}] has unknown keys: {sorted(unknown)}")

        # Stage numbers are positional (1-based) so they also seed generation.
        number = i + 1
        if rs.get("number", number) != number:
            raise StageConfigDecodeError(f"stages[{i}].number must be {number}.")

        values: dict[str, Any] = {"number": number, "name": rs.get("name", f"Stage {number}")}
        if not isinstance(values["name"], str):
            raise StageConfigDecodeError(f"stages[{i}].name must be a string.")

        for name in _INT_FIELDS:
            v = rs.get(name)
            if not isinstance(v, int) or isinstance(v, bool) or v < 0:
                raise StageConfigDecodeError(f"stages[{i}].{name} must be a non-negative integer.")
            values[name] = v

        for name in _FLOAT_FIELDS:
            v = rs.get(name)
            if not isinstance(v, (int, float)) or isinstance(v, bool) or v < 0:
                raise StageConfigDecodeError(f"stages[{i}].{name} must be a non-negative number.")
            values[name] = float(v)

        _check_range(i, values, "block_count_min", "block_count_max")
        _check_range(i, values, "gap_min", "gap_max")
        if values["block_count_min"] < 1:
            raise StageConfigDecodeError(f"stages[{i}].block_count_min must be >= 1.")

        ratios = values["normal_ratio"] + values["ice_ratio"] + values["conveyor_ratio"]
        if ratios > 1.0 + 1e-9:
            raise StageConfigDecodeError(f"stages[{i}] platform type ratios sum above 1.")

        parsed.append(StageConfig(**values))

    return tuple(parsed)


def _check_range(i: int, values: dict[str, Any], lo: str, hi: str) -> None:
    if values[lo] > values[hi]:
        raise StageConfigDecodeError(f"stages[{i}].{lo} must be <= {hi}.")
