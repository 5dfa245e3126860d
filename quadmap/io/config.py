"""
YAML configuration for building a QuadTransformer.

Example (config/quad.yaml):

    src_quad: [[158, 64], [494, 69], [495, 404], [158, 404]]
    dst_quad: null        # unit square
    margin: 0.05
    log_level: WARNING
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Optional
import yaml

from quadmap.core.diagnostics import Observer
from quadmap.transform.quad_transformer import QuadTransformer

_DEFAULT_CFG: Dict = {
    "src_quad": None,
    "dst_quad": None,   # None → unit square
    "margin": None,     # None → no region restriction
    "log_level": "WARNING",
}


def merge_cfg(cfg: Optional[Dict]) -> Dict:
    if not cfg:
        return dict(_DEFAULT_CFG)
    unknown = set(cfg) - set(_DEFAULT_CFG)
    if unknown:
        raise ValueError(f"Unknown config keys: {sorted(unknown)}")
    merged = dict(_DEFAULT_CFG)
    merged.update(cfg)
    return merged


def load_config(path: str | Path) -> Dict:
    with open(path, "r") as f:
        raw = yaml.safe_load(f)
    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"Config at {path} must be a mapping, got {type(raw).__name__}")
    return merge_cfg(raw)


def transformer_from_config(cfg: Optional[Dict], observer: Optional[Observer] = None) -> QuadTransformer:
    cfg = merge_cfg(cfg)
    return QuadTransformer(
        src_quad=cfg["src_quad"],
        dst_quad=cfg["dst_quad"],
        margin=cfg["margin"],
        observer=observer,
    )
