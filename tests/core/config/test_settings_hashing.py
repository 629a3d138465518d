# tests/core/config/test_settings_hashing.py
"""
Testes do hashing canônico (compute_config_hash).

Invariantes:
    - Estruturas equivalentes produzem o mesmo hash
    - O hash independe da ordem das chaves
    - O hash é SHA-256 do JSON canônico
    - Dataclasses e mapeamentos imutáveis têm a forma canônica de um dict
"""

import hashlib
import json

import pytest

try:
    from datcfg.core.config.hashing import canonicalize, compute_config_hash
except Exception as e:  # noqa: BLE001
    compute_config_hash = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing compute_config_hash. Implement:"
            "- src/datcfg/core/config/hashing.py"
            f"Import error: {_IMPORT_ERR}"
        )


def test_hash_is_deterministic():
    _require_imports()
    a = {"discovery": {"pattern": "*.datcfg", "directory": "."}, "values": {"path": "dat.vars"}}
    b = {"values": {"path": "dat.vars"}, "discovery": {"directory": ".", "pattern": "*.datcfg"}}
    assert compute_config_hash(a) == compute_config_hash(b)


def test_hash_matches_sha256_of_canonical_json():
    _require_imports()
    cfg = {"b": 1, "a": [1, 2]}
    canonical = json.dumps(cfg, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    assert compute_config_hash(cfg) == hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def test_hash_changes_on_override():
    _require_imports()
    assert compute_config_hash({"x": 1}) != compute_config_hash({"x": 2})


def test_hash_rejects_non_dict():
    _require_imports()
    with pytest.raises(TypeError):
        compute_config_hash(["not", "a", "dict"])  # type: ignore[arg-type]


def test_resolved_values_hash_like_their_plain_form():
    _require_imports()
    from dataclasses import dataclass
    from types import MappingProxyType

    @dataclass(frozen=True)
    class Sizes:
        controller_count: int
        worker_count: int

    resolved = {
        "variables": MappingProxyType({"n": 3}),
        "cluster": Sizes(controller_count=3, worker_count=2),
        "files": ("a.datcfg",),
    }
    plain = {
        "variables": {"n": 3},
        "cluster": {"controller_count": 3, "worker_count": 2},
        "files": ["a.datcfg"],
    }
    assert canonicalize(resolved) == plain
    assert compute_config_hash(resolved) == compute_config_hash(plain)


def test_canonicalize_falls_back_to_str():
    _require_imports()
    from enum import Enum
    from pathlib import Path

    class Level(Enum):
        INFO = "info"

    assert canonicalize({"p": Path("x/y"), "l": Level.INFO, 1: None}) == {
        "p": "x/y",
        "l": "info",
        "1": None,
    }
