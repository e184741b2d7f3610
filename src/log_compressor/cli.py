"""Typer CLI entrypoint for log_compressor."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
import yaml
from tqdm.contrib.logging import logging_redirect_tqdm

from log_compressor.config import AppSettings, load_settings
from log_compressor.errors import DirectoryResolutionError
from log_compressor.logging_utils import configure_logging
from log_compressor.pipeline.runner import CompressRunOptions, resolve_target_directory, run_compress_batch

app = typer.Typer(
    add_completion=False,
    help="Compress rotated .log files in a directory into timestamped ZIP archives.",
)


def _load_and_configure_logger(
    config_file: Path | None,
    *,
    log_file: Path | None = None,
    verbose: bool = False,
) -> tuple[AppSettings, logging.Logger]:
    settings = load_settings(config_file=config_file)
    settings = settings.with_overrides(log_file=log_file, level="DEBUG" if verbose else None)
    logger = configure_logging(settings.logging.level, settings.logging.log_file)
    return settings, logger


@app.callback(invoke_without_command=True)
def compress(
    ctx: typer.Context,
    directory: Path | None = typer.Option(
        None,
        "--directory",
        "-d",
        help="Directory to scan (default: current working directory).",
    ),
    suffix: str | None = typer.Option(
        None,
        "--suffix",
        help="Log file extension to match, case-sensitive (default from settings: log).",
    ),
    workers: int | None = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        help="Maximum files compressed concurrently; 1 runs sequentially.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Discover and probe files without writing anything.",
    ),
    no_progress: bool = typer.Option(
        False,
        "--no-progress",
        help="Disable the live byte progress bar.",
    ),
    verify_crc: bool = typer.Option(
        False,
        "--verify-crc",
        help="Re-read each archive and check CRCs before deleting the source.",
    ),
    summary_json: Path | None = typer.Option(
        None,
        "--summary-json",
        help="Write a JSON run summary to this path.",
        dir_okay=False,
    ),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        help="Also write log lines to this file.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Compress every eligible log file and delete the originals."""

    if ctx.invoked_subcommand is not None:
        return

    try:
        target_dir = resolve_target_directory(directory)
    except DirectoryResolutionError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    settings, logger = _load_and_configure_logger(config_file, log_file=log_file, verbose=verbose)
    settings = settings.with_overrides(
        log_suffix=suffix,
        max_workers=workers,
        show_progress=False if no_progress else None,
        verify_crc=True if verify_crc else None,
    )
    options = CompressRunOptions(dry_run=dry_run, summary_path=summary_json)

    typer.echo("===== Start =====")
    with logging_redirect_tqdm():
        try:
            result = run_compress_batch(settings, directory=target_dir, options=options, logger=logger)
        except DirectoryResolutionError as exc:
            logger.error("compress_run.directory_unresolved error=%s", exc)
            raise typer.Exit(code=1) from exc

    summary = result.summary
    typer.echo(f"run_id: {summary['run_id']}")
    typer.echo(f"directory: {summary['directory']}")
    typer.echo(f"candidates_found: {summary['candidates_found']}")
    if dry_run:
        plan = summary["dry_run_plan"]
        typer.echo(f"would_compress: {len(plan['would_compress'])}")
        typer.echo(f"skipped_in_use: {len(plan['skipped_in_use'])}")
    else:
        typer.echo(f"files_compressed: {summary['files_compressed']}")
        typer.echo(f"files_skipped_in_use: {summary['files_skipped_in_use']}")
        typer.echo(f"files_failed: {summary['files_failed']}")
        typer.echo(f"cleanup_warnings: {summary['cleanup_warnings']}")
    if result.summary_path is not None:
        typer.echo(f"summary_path: {result.summary_path}")
    typer.echo("===== Finish =====")


@app.command("show-config")
def show_config(
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Print the effective configuration after env overrides."""

    settings = load_settings(config_file=config_file)
    rendered = yaml.safe_dump(settings.as_dict(), sort_keys=False)
    typer.echo(rendered)


def main() -> None:
    """CLI script entrypoint."""

    app()


if __name__ == "__main__":
    main()
