from __future__ import annotations

import logging
import os
import zipfile
from typing import List, Optional, Tuple

from ..formats.osu_impl import load_osu, parse_osu
from ..types import Beatmap

logger = logging.getLogger(__name__)


def _read_pack_member(z: zipfile.ZipFile, name: str) -> Beatmap:
    raw = z.read(name)
    return parse_osu(raw.decode("utf-8-sig"))


def _pack_members(z: zipfile.ZipFile) -> List[str]:
    return sorted(n for n in z.namelist() if n.lower().endswith(".osu"))


def load_beatmap_pack(path: str) -> List[Tuple[str, Beatmap]]:
    """Parse every difficulty of an .osz archive, sorted by member name."""
    with zipfile.ZipFile(path, "r") as z:
        members = _pack_members(z)
        if not members:
            raise ValueError(f"no .osu files found in {path}")
        return [(name, _read_pack_member(z, name)) for name in members]


def list_versions(path: str) -> List[str]:
    if not is_pack(path):
        return [load_osu(path).version]
    return [b.version for _, b in load_beatmap_pack(path)]


def is_pack(path: str) -> bool:
    return str(path).lower().endswith((".osz", ".zip"))


def load_beatmap(path: str, version: Optional[str] = None) -> Beatmap:
    if not os.path.isfile(path):
        raise ValueError(f"Invalid beatmap path: {path}")

    if not is_pack(path):
        b = load_osu(path)
        if version and b.version.lower() != version.strip().lower():
            logger.warning("--version %r ignored for single .osu file (%r)", version, b.version)
        return b

    pack = load_beatmap_pack(path)
    if not version:
        name, b = pack[0]
        logger.debug("no version requested, using %s", name)
        return b

    want = version.strip().lower()
    for name, b in pack:
        if b.version.lower() == want:
            logger.debug("selected %s for version %r", name, version)
            return b
    available = ", ".join(repr(b.version) for _, b in pack)
    raise ValueError(f"version {version!r} not found in {path} (available: {available})")
