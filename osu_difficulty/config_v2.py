from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple


def _strip_jsonc_comments(src: str) -> str:
    # Drops //, # and /* */ comments; string literals are copied untouched.
    out: List[str] = []
    i = 0
    n = len(src)

    in_str = False
    quote = '"'
    escape = False
    in_line_comment = False
    in_block_comment = False

    while i < n:
        ch = src[i]
        nxt = src[i + 1] if i + 1 < n else ""

        if in_line_comment:
            if ch == "\n":
                in_line_comment = False
                out.append(ch)
            i += 1
            continue

        if in_block_comment:
            if ch == "*" and nxt == "/":
                in_block_comment = False
                i += 2
            else:
                i += 1
            continue

        if in_str:
            out.append(ch)
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == quote:
                in_str = False
            i += 1
            continue

        if ch in ("\"", "'"):
            in_str = True
            quote = ch
            out.append(ch)
        elif ch == "/" and nxt == "/":
            in_line_comment = True
            i += 1
        elif ch == "#":
            in_line_comment = True
        elif ch == "/" and nxt == "*":
            in_block_comment = True
            i += 1
        else:
            out.append(ch)
        i += 1

    return "".join(out)


def parse_config_v2(raw: str) -> Dict[str, Any]:
    data = json.loads(_strip_jsonc_comments(raw.lstrip("\ufeff")))
    if not isinstance(data, dict):
        raise ValueError("config root must be an object")
    return data


def load_config_v2(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return parse_config_v2(f.read())


def _get_section(cfg: Dict[str, Any], key: str) -> Dict[str, Any]:
    v = cfg.get(key)
    return v if isinstance(v, dict) else {}


def flatten_config_v2(cfg: Dict[str, Any]) -> Tuple[Dict[str, Any], Optional[Dict[str, Any]]]:
    """Map config sections onto CLI argument names; returns (flat, mods)."""
    mods_cfg = cfg.get("mods") if isinstance(cfg.get("mods"), dict) else None

    flat: Dict[str, Any] = {}

    inp = _get_section(cfg, "input")
    difficulty = _get_section(cfg, "difficulty")
    output = _get_section(cfg, "output")
    debug = _get_section(cfg, "debug")

    def pull(dst_key: str, section: Dict[str, Any], section_key: str):
        if section_key in section:
            flat[dst_key] = section.get(section_key)

    pull("input", inp, "path")
    pull("version", inp, "version")

    pull("clock_rate", difficulty, "clock_rate")
    if "stacking" in difficulty:
        flat["no_stacking"] = not bool(difficulty.get("stacking"))

    pull("format", output, "format")
    pull("output", output, "output")
    pull("precision", output, "precision")

    pull("quiet", debug, "quiet")
    pull("basic_debug", debug, "basic_debug")

    return flat, mods_cfg


def dump_config_v2(args: Any, *, mods: Optional[Dict[str, Any]] = None) -> str:
    cfg: Dict[str, Any] = {
        "version": 2,
        "input": {
            "path": getattr(args, "input", None),
            "version": getattr(args, "version", None),
        },
        "difficulty": {
            "clock_rate": getattr(args, "clock_rate", None),
            "stacking": not bool(getattr(args, "no_stacking", False)),
        },
        "output": {
            "format": str(getattr(args, "format", "table")),
            "output": getattr(args, "output", None),
            "precision": int(getattr(args, "precision", 3)),
        },
        "debug": {
            "quiet": bool(getattr(args, "quiet", False)),
            "basic_debug": bool(getattr(args, "basic_debug", False)),
        },
    }

    if isinstance(mods, dict):
        cfg["mods"] = mods

    header_lines = [
        "// osu_difficulty config v2 (JSON with comments)",
        "//",
        "// Basic usage:",
        "//   python3 -m osu_difficulty --input <map.osu|pack.osz> --config <this_file>",
        "//   python3 -m osu_difficulty --input <map.osu|pack.osz> --save_config config.jsonc",
        "//",
        "// Notes:",
        "// - Lines starting with // or # are comments.",
        "// - CLI args override config values.",
        "// - difficulty.clock_rate overrides the rate implied by mods (double_time, half_time, rate).",
        "",
    ]
    header = "\n".join(header_lines)

    body = json.dumps(cfg, ensure_ascii=False, indent=2)
    return header + body + "\n"
