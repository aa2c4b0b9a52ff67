from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
import time
from pathlib import Path

import yaml

from growthfit import __version__
from growthfit.config.loader import CONFIG_FILENAME, load_config, resolve_config_paths
from growthfit.config.schema import GrowthFitConfig
from growthfit.config.templates import CONFIG_PRESETS
from growthfit.config.validate import validate_config_paths
from growthfit.dataset.measure import TargetError, load_target, measure_callable
from growthfit.dataset.reader import DatasetError, format_dataset, read_dataset, read_stream
from growthfit.fit.growth import select_growth_functions
from growthfit.fit.models import NARROWING_MODES, Observation
from growthfit.fit.ranker import rank
from growthfit.report.format_json import write_json
from growthfit.report.format_md import to_markdown
from growthfit.report.format_text import DiagnosticWriter, format_verdict
from growthfit.report.models import FitReport
from growthfit.util.logging import setup_logging

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_INPUT = 2


def _load_cli_config(args: argparse.Namespace) -> GrowthFitConfig:
    config_paths = [Path(p) for p in args.config] if args.config else None
    cfg = load_config(Path.cwd(), config_paths)
    overrides: dict[str, object] = {}
    if args.narrowing:
        overrides["narrowing"] = args.narrowing
    if args.workers is not None:
        overrides["parallel_workers"] = max(0, args.workers)
    if args.quiet:
        overrides["diagnostics"] = False
    return dataclasses.replace(cfg, **overrides) if overrides else cfg


def _run_fit(dataset: list[Observation], cfg: GrowthFitConfig, args: argparse.Namespace, source: str) -> int:
    settings = cfg.search_settings()
    candidates = select_growth_functions(cfg.candidates)
    writer = DiagnosticWriter(enabled=cfg.diagnostics)
    if not dataset:
        log.warning("Dataset is empty; every candidate fits trivially.")

    ranking = rank(
        dataset,
        settings=settings,
        candidates=candidates,
        workers=cfg.parallel_workers,
        on_result=writer,
    )
    print(format_verdict(ranking.verdict))

    if args.json_path or args.md_path:
        report = FitReport.from_ranking(
            ranking,
            dataset,
            settings,
            generated_at=time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            source=source,
        )
        if args.json_path:
            write_json(report, Path(args.json_path))
            log.info("Wrote JSON report to %s", args.json_path)
        if args.md_path:
            md_path = Path(args.md_path)
            md_path.parent.mkdir(parents=True, exist_ok=True)
            md_path.write_text(to_markdown(report), encoding="utf-8")
            log.info("Wrote Markdown report to %s", args.md_path)
    return EXIT_OK


def cmd_fit(args: argparse.Namespace) -> int:
    cfg = _load_cli_config(args)
    try:
        if args.input == "-":
            dataset = read_stream(sys.stdin)
            source = "<stdin>"
        else:
            dataset = read_dataset(Path(args.input))
            source = str(args.input)
    except DatasetError as exc:
        log.error("Malformed input: %s", exc)
        return EXIT_INPUT
    return _run_fit(dataset, cfg, args, source)


def _parse_sizes(raw: str | None) -> list[int] | None:
    if not raw:
        return None
    out: list[int] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        out.append(int(part))
    return out or None


def cmd_measure(args: argparse.Namespace) -> int:
    cfg = _load_cli_config(args)
    try:
        sizes = _parse_sizes(args.sizes) or cfg.measure_sizes
    except ValueError:
        log.error("--sizes must be a comma separated list of integers: %s", args.sizes)
        return EXIT_CONFIG
    trials = args.trials if args.trials is not None else cfg.measure_trials
    warmups = args.warmups if args.warmups is not None else cfg.measure_warmups

    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    try:
        target = load_target(args.target)
        dataset = measure_callable(target, sizes, trials=trials, warmups=warmups)
    except TargetError as exc:
        log.error("%s", exc)
        return EXIT_CONFIG
    except Exception as exc:
        log.error("Timing %s failed: %s", args.target, exc)
        return EXIT_CONFIG

    if args.save_data:
        data_path = Path(args.save_data)
        data_path.parent.mkdir(parents=True, exist_ok=True)
        data_path.write_text(format_dataset(dataset), encoding="utf-8")
        log.info("Wrote measurements to %s", data_path)
    return _run_fit(dataset, cfg, args, args.target)


def cmd_init(args: argparse.Namespace) -> int:
    root = Path(args.path).resolve()
    target = Path(args.output) if args.output else root / CONFIG_FILENAME
    if not target.is_absolute():
        target = root / target
    preset = str(args.preset or "full").lower()
    template = CONFIG_PRESETS.get(preset, CONFIG_PRESETS["full"])
    if target.exists() and not args.force:
        log.error("Config %s already exists. Use --force to overwrite.", target)
        return EXIT_CONFIG
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(template, encoding="utf-8")
    log.info("Wrote config to %s", target)
    return EXIT_OK


def cmd_config_show(args: argparse.Namespace) -> int:
    root = Path(args.path).resolve()
    config_paths = [Path(p) for p in args.config] if args.config else None
    cfg = load_config(root, config_paths)
    text = yaml.safe_dump(dataclasses.asdict(cfg), sort_keys=False, allow_unicode=True)
    if args.output:
        out_path = Path(args.output)
        if not out_path.is_absolute():
            out_path = root / out_path
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
    else:
        print(text)
    return EXIT_OK


def cmd_config_validate(args: argparse.Namespace) -> int:
    root = Path(args.path).resolve()
    config_paths = resolve_config_paths(root, [Path(p) for p in args.config] if args.config else None)
    if not args.config and not config_paths[0].exists():
        log.error("Config %s not found.", config_paths[0])
        return EXIT_CONFIG
    errors = validate_config_paths(config_paths)
    if errors:
        for err in errors:
            log.error("%s", err)
        return EXIT_CONFIG
    log.info("Config valid.")
    return EXIT_OK


def _add_fit_options(a: argparse.ArgumentParser) -> None:
    a.add_argument(
        "--config",
        action="append",
        default=None,
        help=f"Config file path (repeatable, default: ./{CONFIG_FILENAME} if present)",
    )
    a.add_argument(
        "--narrowing",
        default=None,
        choices=list(NARROWING_MODES),
        help="Interval narrowing between search rounds (default: from config, symmetric)",
    )
    a.add_argument("--workers", type=int, default=None, help="Fit candidates on N threads (0/1 = sequential)")
    a.add_argument("-q", "--quiet", action="store_true", help="Do not write per-candidate diagnostics to stderr")
    a.add_argument("--json", dest="json_path", default=None, help="Write a JSON report to this path")
    a.add_argument("--md", dest="md_path", default=None, help="Write a Markdown report to this path")


def _add_config_path_args(a: argparse.ArgumentParser) -> None:
    a.add_argument("path", nargs="?", default=".", help="Directory holding the config (default: .)")
    a.add_argument(
        "--config",
        action="append",
        default=None,
        help="Config file path (repeatable, relative to path or absolute)",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="growthfit", description="growthfit  Guess time complexity from (size, runtime) measurements"
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    sub = p.add_subparsers(dest="cmd", required=True)

    f = sub.add_parser("fit", help="Rank growth functions against a dataset")
    f.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Dataset file: a count followed by that many 'size runtime' pairs (default: - for stdin)",
    )
    _add_fit_options(f)
    f.set_defaults(func=cmd_fit)

    m = sub.add_parser("measure", help="Time a Python callable at several sizes and rank the result")
    m.add_argument("target", help="Callable to time, as package.module:function")
    m.add_argument("--sizes", default=None, help="Comma separated input sizes (default: from config)")
    m.add_argument("--trials", type=int, default=None, help="Timed runs per size (median is kept)")
    m.add_argument("--warmups", type=int, default=None, help="Untimed runs per size")
    m.add_argument("--save-data", default=None, help="Also write the measurements in the dataset format")
    _add_fit_options(m)
    m.set_defaults(func=cmd_measure)

    c = sub.add_parser("config", help="Config utilities")
    c_sub = c.add_subparsers(dest="config_cmd", required=True)
    c_show = c_sub.add_parser("show", help="Show merged config")
    _add_config_path_args(c_show)
    c_show.add_argument("--output", default=None, help="Write output to path instead of stdout")
    c_show.set_defaults(func=cmd_config_show)

    c_validate = c_sub.add_parser("validate", help="Validate config file(s)")
    _add_config_path_args(c_validate)
    c_validate.set_defaults(func=cmd_config_validate)

    i = sub.add_parser("init", help="Create a growthfit configuration file")
    i.add_argument("path", nargs="?", default=".", help="Target directory (default: .)")
    i.add_argument("--output", default=None, help=f"Output path (default: {CONFIG_FILENAME})")
    i.add_argument(
        "--preset",
        default="full",
        choices=sorted(CONFIG_PRESETS.keys()),
        help="Template preset (default: full)",
    )
    i.add_argument("--force", action="store_true", help="Overwrite existing config if present")
    i.set_defaults(func=cmd_init)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(bool(args.verbose))
    return int(args.func(args))
