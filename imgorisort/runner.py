from __future__ import annotations

import logging
import shutil
from collections import Counter
from collections.abc import Iterable, Sequence
from pathlib import Path

from imgorisort.config import MoveMode, RunConfig
from imgorisort.dedup import dedupe
from imgorisort.errors import ImgorisortError, PlanMismatchError
from imgorisort.models import RelocationPlan, RelocationReport, RunReport
from imgorisort.organize import resolve_plan
from imgorisort.paths import check_input_root, ensure_output_dirs, walk

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 2

SKIP_CONFLICT = "CONFLICT"


def plan(config: RunConfig, sources: Iterable[Path]) -> list[RelocationPlan]:
    """Resolve one plan per source, in order."""
    plans: list[RelocationPlan] = []
    claimed: set[Path] = set()
    for src in sources:
        resolved = resolve_plan(config, src)
        if resolved.skipped:
            plans.append(resolved)
            continue

        desired = resolved.destination
        if config.skip_existing and (desired in claimed or desired.exists()):
            LOGGER.warning("Skipping %s: %s already exists", src, desired)
            plans.append(RelocationPlan(src, None, SKIP_CONFLICT))
            continue

        final = dedupe(desired, config.overwrite, claimed)
        if final != desired:
            LOGGER.info("%s exists, using %s", desired, final.name)
        claimed.add(final)
        plans.append(RelocationPlan(src, final))
    return plans


def check_plans(sources: Sequence[Path], plans: Sequence[RelocationPlan]) -> None:
    if len(sources) != len(plans):
        raise PlanMismatchError(f"{len(sources)} source(s) but {len(plans)} plan(s); this is a bug")


def relocate(plans: Iterable[RelocationPlan], *, copy: bool = False, dry_run: bool = False) -> RelocationReport:
    """Move (or copy) every planned file. One failure never stops the batch."""
    report = RelocationReport()
    verb = "copy" if copy else "move"
    for p in plans:
        if p.skipped:
            report.skipped += 1
            continue

        if dry_run:
            LOGGER.info("[dry-run] %s %s -> %s", verb, p.source, p.destination)
            report.relocated += 1
            continue

        try:
            if copy:
                shutil.copy2(p.source, p.destination)
            else:
                shutil.move(str(p.source), str(p.destination))
        except (OSError, shutil.Error) as exc:
            LOGGER.warning("Failed to %s %s -> %s: %s", verb, p.source, p.destination, exc)
            report.failed += 1
            continue

        LOGGER.info("%s -> %s", p.source, p.destination)
        report.relocated += 1
    return report


def run_once(config: RunConfig) -> RunReport:
    mode = config.mode
    copy = isinstance(mode, MoveMode) and mode.copy

    check_input_root(config.input_root)
    # Output folders must exist before anything is touched.
    if isinstance(mode, MoveMode) and not config.dry_run:
        ensure_output_dirs(mode.output_root)

    LOGGER.debug("Walking %s (recursive=%s)", config.input_root, config.recursive)
    sources = list(walk(config.input_root, config.recursive, read_headers=config.read_headers))
    plans = plan(config, sources)
    check_plans(sources, plans)

    relocation = relocate(plans, copy=copy, dry_run=config.dry_run)
    skips = Counter(p.reason for p in plans if p.skipped)
    return RunReport(
        dry_run=config.dry_run,
        discovered=len(sources),
        relocation=relocation,
        skips_by_reason=skips,
        plans=plans,
    )


def build_summary(report: RunReport) -> list[str]:
    action = "Would relocate" if report.dry_run else "Relocated"
    lines = [f"{action} {report.relocated} of {report.discovered} image(s)."]
    if report.relocation.failed:
        lines.append(f"  failed: {report.relocation.failed}")
    for reason, value in sorted(report.skips_by_reason.items()):
        lines.append(f"  skipped ({reason}): {value}")
    return lines


def run_sync(config: RunConfig, *, quiet: bool = False, verbose: bool = False) -> int:
    try:
        report = run_once(config)
    except ImgorisortError as exc:
        LOGGER.error("%s", exc)
        return EXIT_ERROR

    if quiet:
        return EXIT_OK

    if report.dry_run:
        for p in report.plans:
            if p.destination is not None:
                print(f"{p.source} -> {p.destination}")

    lines = build_summary(report)
    print("\n".join(lines if verbose else lines[:1]))
    return EXIT_OK
