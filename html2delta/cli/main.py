"""Main CLI entry point for the html2delta command.

This module provides the Typer application that serves as the entry point
for the html2delta command-line tool. It reads an HTML file (or stdin),
converts it and writes the delta operations as JSON.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from delta import Delta

from html2delta import __version__
from html2delta.cli.config import ConfigLoader
from html2delta.cli.errors import CLIError, ConfigError, FilesystemError
from html2delta.cli.models import ExitCode
from html2delta.cli.output import OutputHandler
from html2delta.converter.errors import ConversionError
from html2delta.converter.html_converter import HtmlToDeltaConverter
from html2delta.converter.models import ConverterOptions

app = typer.Typer(
    name="html2delta",
    help="""Convert HTML into rich-text delta operations.

QUICK START:
  html2delta page.html                     # Print operations as JSON
  html2delta page.html -o page.json        # Write operations to a file
  cat page.html | html2delta -             # Read HTML from stdin
  html2delta page.html --lines             # Show lines and their block attributes""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

# Module logger
logger = logging.getLogger(__name__)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'html2delta' namespace logger to avoid affecting
    third-party libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("html2delta")
    app_logger.setLevel(level)

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"html2delta_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _read_input(input_path: str) -> str:
    """Read HTML from a file, or from stdin when input_path is '-'.

    Raises:
        FilesystemError: If the file cannot be read
    """
    if input_path == "-":
        return sys.stdin.read()

    try:
        with open(input_path, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        raise FilesystemError(input_path, 'read', 'File not found')
    except PermissionError:
        raise FilesystemError(input_path, 'read', 'Permission denied')
    except (OSError, UnicodeDecodeError) as e:
        raise FilesystemError(input_path, 'read', str(e))


def _write_output(output_path: str, content: str) -> None:
    """Write converted operations to a file.

    Raises:
        FilesystemError: If the file cannot be written
    """
    try:
        path = Path(output_path)
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
    except PermissionError:
        raise FilesystemError(output_path, 'write', 'Permission denied')
    except OSError as e:
        raise FilesystemError(output_path, 'write', str(e))


def _run_convert(
    input_path: str,
    output_path: Optional[str],
    config_path: Optional[str],
    indent: int,
    lines: bool,
    logdir: Optional[str],
    verbosity: int,
    no_color: bool,
) -> None:
    """Run conversion command.

    Args:
        input_path: HTML file path, or '-' for stdin
        output_path: Optional JSON output file (stdout when None)
        config_path: Optional YAML options file
        indent: JSON indentation (0 for compact output)
        lines: Show a line table instead of JSON
        logdir: Directory for log files
        verbosity: Verbosity level
        no_color: Whether to disable colored output
    """
    _configure_logging(verbosity, logdir)

    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        if config_path:
            options = ConfigLoader.load(config_path)
            output.debug(f"Loaded options from {config_path}")
        else:
            options = ConverterOptions()

        markup = _read_input(input_path)
        output.info(f"Converting {input_path} ({len(markup)} characters)")

        converter = HtmlToDeltaConverter(options=options)
        operations = converter.convert_html(markup)

        if lines:
            output.print_lines(Delta(operations))
        else:
            content = json.dumps(operations, indent=indent or None, ensure_ascii=False)
            if output_path:
                _write_output(output_path, content + "\n")
                output.success(f"Wrote {len(operations)} operation(s) to {output_path}")
            else:
                typer.echo(content)

        output.print_summary(operations)
        raise typer.Exit(ExitCode.SUCCESS)

    except (ConfigError, FilesystemError) as e:
        logger.error(f"Conversion failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.INPUT_ERROR)

    except ConversionError as e:
        logger.error(f"Conversion failed: {e}")
        output.error(f"Conversion failed: {e}")
        raise typer.Exit(ExitCode.CONVERSION_ERROR)

    except CLIError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    except typer.Exit:
        raise

    except Exception as e:
        logger.exception("Unexpected error during conversion")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


@app.command()
def main_command(
    input_path: Optional[str] = typer.Argument(
        None,
        help="HTML file to convert ('-' reads stdin)",
        metavar="INPUT",
    ),
    output_path: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write JSON operations to this file instead of stdout",
        metavar="FILE",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML options file",
        metavar="FILE",
    ),
    indent: int = typer.Option(
        2,
        "--indent",
        help="JSON indentation (0 for compact output)",
    ),
    lines: bool = typer.Option(
        False,
        "--lines",
        help="Show each line with its block attributes instead of JSON",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Convert HTML into rich-text delta operations.

    \b
    QUICK START:
      html2delta page.html                     # Print operations as JSON
      html2delta page.html -o page.json        # Write operations to a file
      cat page.html | html2delta -             # Read HTML from stdin
      html2delta page.html --lines             # Show lines and their block attributes
    """
    if version:
        typer.echo(f"html2delta version {__version__}")
        raise typer.Exit()

    if input_path is None:
        typer.echo("Error: Missing argument 'INPUT'.", err=True)
        typer.echo("")
        typer.echo("Example:")
        typer.echo("  html2delta page.html")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if indent < 0:
        typer.echo("Error: --indent must be 0 or greater", err=True)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    _run_convert(input_path, output_path, config_path, indent, lines, logdir, verbosity, no_color)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m html2delta.cli.main
if __name__ == "__main__":
    main()
