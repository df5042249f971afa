from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence

from .config.schema import OUTPUT_FORMATS, DifficultyConfig
from .config_v2 import dump_config_v2, flatten_config_v2, load_config_v2
from .engine.difficulty_objects import calculate
from .io.beatmap_loader_impl import list_versions, load_beatmap
from .io.report_impl import render_report
from .logging_setup import setup_logging
from .runtime.mods import parse_mod_string

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="osu_difficulty",
        description="Per-object difficulty features (strain time, jump/travel distance, angle) for osu! beatmaps.",
    )
    g_in = ap.add_argument_group("Input")
    g_in.add_argument("--input", type=str, default=None, help=".osu file OR .osz pack")
    g_in.add_argument("--version", type=str, default=None, help="Difficulty name inside an .osz pack")
    g_in.add_argument("--list_versions", action="store_true", help="List difficulty names and exit")

    g_diff = ap.add_argument_group("Difficulty")
    g_diff.add_argument("--mods", type=str, default=None, help="Mod acronyms, e.g. DT,HR")
    g_diff.add_argument("--clock_rate", type=float, default=None, help="Override the playback rate implied by mods")
    g_diff.add_argument("--no_stacking", action="store_true", help="Ignore stack offsets")

    g_out = ap.add_argument_group("Output")
    g_out.add_argument("--format", type=str, default="table", choices=list(OUTPUT_FORMATS))
    g_out.add_argument("--output", type=str, default=None, help="Write the report here instead of stdout")
    g_out.add_argument("--precision", type=int, default=3)

    g_cfg = ap.add_argument_group("Config")
    g_cfg.add_argument("--config", type=str, default=None, help="Config v2 (JSONC) path")
    g_cfg.add_argument("--save_config", type=str, default=None, help="Write config v2 (JSONC) to this path")

    g_dbg = ap.add_argument_group("Debug")
    g_dbg.add_argument("--quiet", action="store_true", help="Less console output")
    g_dbg.add_argument("--basic_debug", action="store_true")
    return ap


def _given_on_cli(argv: Sequence[str], key: str) -> bool:
    flag = "--" + key
    return any(a == flag or a.startswith(flag + "=") for a in argv)


def _apply_config_file(args: argparse.Namespace, argv: Sequence[str]) -> Optional[Dict[str, Any]]:
    try:
        raw = load_config_v2(str(args.config))
    except (OSError, ValueError) as e:
        raise SystemExit(f"Failed to load config {args.config}: {e}")

    flat_cfg, mods_cfg = flatten_config_v2(raw)
    for k, v in flat_cfg.items():
        if not hasattr(args, k):
            continue
        if _given_on_cli(argv, k):
            continue
        setattr(args, k, v)
    return mods_cfg


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    argv_list = list(sys.argv[1:] if argv is None else argv)
    args = ap.parse_args(argv_list)

    cfg_mods: Optional[Dict[str, Any]] = None
    if args.config:
        cfg_mods = _apply_config_file(args, argv_list)

    setup_logging(args)
    logger.debug("CLI args parsed")

    mods: Dict[str, Any] = dict(cfg_mods or {})
    if args.mods:
        try:
            mods.update(parse_mod_string(args.mods))
        except ValueError as e:
            raise SystemExit(str(e))

    if args.save_config:
        with open(args.save_config, "w", encoding="utf-8") as f:
            f.write(dump_config_v2(args, mods=mods or None))
        logger.info("Config written to %s", args.save_config)
        if not args.input:
            return 0

    if not args.input:
        raise SystemExit("--input must be provided")

    if args.list_versions:
        try:
            versions = list_versions(args.input)
        except (OSError, ValueError) as e:
            raise SystemExit(f"Failed to read {args.input}: {e}")
        for v in versions:
            sys.stdout.write(v + "\n")
        return 0

    try:
        cfg = DifficultyConfig.from_args(args, mods=mods)
    except ValueError as e:
        raise SystemExit(f"Invalid configuration: {e}")

    logger.info("Input: %s", args.input)
    if cfg.mods:
        logger.info("Mods: %s", ", ".join(sorted(cfg.mods)))

    try:
        beatmap = load_beatmap(args.input, cfg.version)
    except (OSError, ValueError) as e:
        logger.error("Failed to load beatmap: %s", e)
        raise SystemExit(1)

    try:
        result = calculate(beatmap, cfg.mods, clock_rate=cfg.clock_rate, stacking=cfg.stacking)
    except ValueError as e:
        raise SystemExit(f"Invalid mods: {e}")

    logger.info(
        "%s [%s]: %d objects, clock rate %.3f",
        beatmap.title or "(untitled)",
        beatmap.version or "-",
        len(beatmap.hit_objects),
        result.clock_rate,
    )

    text = render_report(result, cfg.output_format, cfg.precision)
    if cfg.output:
        with open(cfg.output, "w", encoding="utf-8") as f:
            f.write(text)
        logger.info("Report written to %s", cfg.output)
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
