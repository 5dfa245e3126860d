from __future__ import annotations
from pathlib import Path

import numpy as np
import pytest

from quadmap.io.config import load_config, merge_cfg, transformer_from_config

REPO_CONFIG = Path(__file__).resolve().parent.parent / "config" / "quad.yaml"


def _write(tmp_path, text):
    p = tmp_path / "quad.yaml"
    p.write_text(text)
    return p


def test_merge_cfg_defaults():
    cfg = merge_cfg(None)
    assert cfg["src_quad"] is None
    assert cfg["dst_quad"] is None
    assert cfg["margin"] is None
    assert cfg["log_level"] == "WARNING"


def test_merge_cfg_rejects_unknown_keys():
    with pytest.raises(ValueError):
        merge_cfg({"margn": 0.1})


def test_load_config_overlays_defaults(tmp_path):
    p = _write(tmp_path, "src_quad: [[0, 0], [1, 0], [1, 1], [0, 1]]\nmargin: 0.5\n")
    cfg = load_config(p)
    assert cfg["margin"] == 0.5
    assert cfg["dst_quad"] is None
    assert cfg["src_quad"] == [[0, 0], [1, 0], [1, 1], [0, 1]]


def test_empty_config_file_gives_defaults(tmp_path):
    assert load_config(_write(tmp_path, "")) == merge_cfg(None)


def test_non_mapping_config_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, "- 1\n- 2\n"))


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_transformer_from_config(tmp_path):
    p = _write(tmp_path, (
        "src_quad: [0, 0, 1, 0, 1, 1, 0, 1]\n"
        "dst_quad: [[1, 2], [1, 4], [3, 4], [3, 2]]\n"
        "margin: 1.0\n"
    ))
    qt = transformer_from_config(load_config(p), observer=lambda e: None)
    assert qt.is_ready()
    assert qt.margin == 1.0
    assert np.allclose(qt.transform((0.5, 0.5)), (2.0, 3.0))


def test_shipped_config_builds_ready_transformer():
    qt = transformer_from_config(load_config(REPO_CONFIG), observer=lambda e: None)
    assert qt.is_ready()
    assert np.allclose(qt.transform((158, 64)), (0.0, 0.0), atol=1e-6)
