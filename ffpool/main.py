import typer
from pathlib import Path
from typing import Optional
from pydantic import ValidationError

from ffpool.config.loader import load_config, build_config
from ffpool.infrastructure.logging import setup_logging
from ffpool.infrastructure.event_bus import EventBus
from ffpool.infrastructure.ffmpeg import FFmpegAdapter
from ffpool.infrastructure.path_discovery import discover
from ffpool.pipeline.dispatcher import Dispatcher
from ffpool.pipeline.job_executor import JobExecutor
from ffpool.pipeline.path_template import placeholders
from ffpool.ui.reporter import ConsoleReporter
from ffpool.domain.events import DiscoveryFinished
from ffpool.domain.exceptions import InvalidPatternError

app = typer.Typer(help="ffpool - run ffmpeg over many files in parallel")

@app.command()
def transcode(
    thread_count: Optional[int] = typer.Option(
        None, "--thread-count", "-t",
        help="Number of parallel workers (default 2). Most systems can handle 2; go higher on a powerful machine."
    ),
    ffmpeg_options: Optional[str] = typer.Option(
        None, "--ffmpeg-options", "-f",
        help="Options passed to ffmpeg, split on single spaces. The output file name comes from --output."
    ),
    input_directory: Optional[str] = typer.Option(
        None, "--input-directory", "-i",
        help="Glob pattern selecting the files to process (supports ** for recursion)"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o",
        help=(
            "Output file template. Placeholders: {dir} original directory, {parent} its last component, "
            "{name} file name without extension, {ext} extension. "
            "Example: /destination/{dir}/{name}_transcoded.{ext}"
        )
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to YAML config"),
    tool: Optional[str] = typer.Option(None, "--tool", help="Transcoder executable (default ffmpeg)"),
    input_flag: Optional[str] = typer.Option(None, "--input-flag", help="Flag preceding the input path (default -i)"),
    log_path: Optional[Path] = typer.Option(None, "--log-path", help="Write a log file to this path"),
    fail_on_error: Optional[bool] = typer.Option(
        None, "--fail-on-error/--no-fail-on-error",
        help="Exit with status 1 when any file failed"
    ),
    debug: Optional[bool] = typer.Option(None, "--debug/--no-debug", help="Enable verbose debug logging"),
):
    """Transcode every file matching a glob pattern with a pool of ffmpeg workers."""
    try:
        file_values = load_config(config_path) if config_path else {}
        config = build_config(
            file_values,
            threads=thread_count,
            ffmpeg_options=ffmpeg_options,
            input_pattern=input_directory,
            output_template=output,
            tool=tool,
            input_flag=input_flag,
            log_path=str(log_path) if log_path else None,
            fail_on_error=fail_on_error,
            debug=debug,
        )
    except (FileNotFoundError, ValueError, ValidationError) as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    logger = setup_logging(Path(config.log_path) if config.log_path else None, debug=config.debug)
    logger.info(
        f"Config: threads={config.threads}, tool={config.tool}, pattern={config.input_pattern!r}, "
        f"template={config.output_template!r}, options={config.ffmpeg_options!r}"
    )

    try:
        paths = discover(config.input_pattern)
    except InvalidPatternError as exc:
        logger.error(str(exc))
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if not placeholders(config.output_template) and len(paths) > 1:
        typer.secho(
            "Warning: output template has no placeholders; every file writes to the same path.",
            fg=typer.colors.YELLOW,
            err=True,
        )

    bus = EventBus()
    ConsoleReporter(bus)
    bus.publish(DiscoveryFinished(pattern=config.input_pattern, files_found=len(paths)))

    ffmpeg = FFmpegAdapter(tool=config.tool, input_flag=config.input_flag)
    dispatcher = Dispatcher(
        config=config,
        event_bus=bus,
        job_executor=JobExecutor(event_bus=bus, ffmpeg_adapter=ffmpeg),
    )

    try:
        summary = dispatcher.run(paths)
    except KeyboardInterrupt:
        # Workers still running are joined at interpreter exit; they must not pick up new files
        dispatcher.request_stop()
        typer.secho("\nStopped by user (Ctrl+C), no further files will be started", fg=typer.colors.YELLOW)
        raise typer.Exit(code=130)

    if config.fail_on_error and summary.failed:
        raise typer.Exit(code=1)

if __name__ == "__main__":
    app()
