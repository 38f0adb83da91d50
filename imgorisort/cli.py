from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from imgorisort.config import MoveMode, RenameMode, RunConfig, default_output_root
from imgorisort.runner import EXIT_ERROR, run_sync

app = typer.Typer(add_completion=False, help="Sort images into tall / wide / sqr by orientation.")


def _configure_logging(verbose: int, quiet: bool) -> None:
    levels = [logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG]
    level = logging.ERROR if quiet else levels[min(verbose, 3)]
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", force=True)


@app.command()
def sort(
    input_root: Path = typer.Argument(..., help="Image file or directory containing images to sort."),
    output_root: Optional[Path] = typer.Argument(
        None,
        help="Directory to sort images into (tall/, wide/, sqr/ are created). "
        "Defaults to $IMGORISORT_OUTPUT_ROOT or the current directory. Ignored with --rename.",
    ),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Recurse into subdirectories."),
    rename: bool = typer.Option(
        False, "--rename", help="Rename files in place as tall_/wide_/sqr_<name> instead of moving them."
    ),
    copy: bool = typer.Option(False, "--copy", "-c", help="Copy rather than move images into the output directory."),
    prefix: bool = typer.Option(False, "--prefix", "-p", help="Prepend the orientation tag to output filenames."),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace existing files instead of adding _1, _2, ..."),
    skip_existing: bool = typer.Option(
        False, "--skip-existing", help="Leave a file where it is when its destination already exists."
    ),
    read_headers: bool = typer.Option(
        False, "--read-headers", help="Detect images from file headers rather than extensions (slower)."
    ),
    dry_run: bool = typer.Option(False, "--dry-run", "-d", help="Print what would happen without touching files."),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="More diagnostics: -v, -vv, -vvv."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Print nothing except fatal errors."),
) -> None:
    load_dotenv()
    _configure_logging(verbose, quiet)

    if overwrite and skip_existing:
        typer.echo("--overwrite and --skip-existing cannot be combined.", err=True)
        raise typer.Exit(code=EXIT_ERROR)

    if rename:
        if copy or prefix or output_root is not None:
            logging.getLogger(__name__).warning("--rename ignores --copy, --prefix and the output directory")
        mode: MoveMode | RenameMode = RenameMode()
    else:
        mode = MoveMode(output_root=output_root or default_output_root(), copy=copy, prefix=prefix)

    config = RunConfig(
        input_root=input_root,
        mode=mode,
        recursive=recursive,
        overwrite=overwrite,
        skip_existing=skip_existing,
        read_headers=read_headers,
        dry_run=dry_run,
    )
    code = run_sync(config, quiet=quiet, verbose=verbose > 0)
    raise typer.Exit(code=code)


if __name__ == "__main__":
    app()
