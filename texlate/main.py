"""
Main entry point for texlate.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import IO, List, Optional, Tuple

from rich.console import Console
from rich.text import Text

from .answers import AnswerStore
from .config import ConfigManager, get_config
from .constants import APP_NAME, APP_VERSION, APP_DESCRIPTION, TEMPLATE_KEY
from .exceptions import ConfigurationError, OutputWriteError, TexlateError
from .io_handlers import RendererRunner, WriteFailureHandler, write_outputs
from .rich_ui import Prompter, make_console
from .utils import setup_logging
from .wizard import TemplateDriver, Wizard

logger = logging.getLogger(__name__)


def existing_file(value: str) -> str:
    """argparse type for paths that must name an existing file."""
    if not Path(value).is_file():
        raise argparse.ArgumentTypeError(f"path '{value}' does not exist or is not a file")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=APP_DESCRIPTION
    )

    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"{APP_NAME} {APP_VERSION}"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to config file"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        help="Log level (DEBUG, INFO, WARNING, ERROR)"
    )

    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Write the .tex file but do not run the typesetter"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="{create,update}")
    subparsers.required = True

    create = subparsers.add_parser("create", help="Template from scratch")
    create.add_argument("template", type=existing_file, help="source template file")

    update = subparsers.add_parser(
        "update", help="Update a document from an existing values file"
    )
    update.add_argument("values", type=existing_file, help="previous answers")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def load_session(args: argparse.Namespace) -> Tuple[AnswerStore, str]:
    """
    Build the answer store and find the template for the requested mode.

    Returns:
        Tuple of (store, template path)

    Raises:
        ConfigurationError: If the values file is unusable or names no template
    """
    if args.command == "create":
        return AnswerStore.for_template(args.template), args.template

    store = AnswerStore.from_file(args.values)
    template = store.template_origin()
    if not template:
        raise ConfigurationError(
            f"Values file '{args.values}' does not record a template ({TEMPLATE_KEY})"
        )

    if not Path(template).is_file():
        beside_values = Path(args.values).parent / template
        if not beside_values.is_file():
            raise ConfigurationError(f"Template '{template}' from '{args.values}' not found")
        logger.debug(f"Resolved template '{template}' relative to {args.values}")
        return store, str(beside_values)

    return store, template


def run(
    args: argparse.Namespace,
    config: ConfigManager,
    console: Optional[Console] = None,
    stdin: Optional[IO[str]] = None,
    stdout: Optional[IO[str]] = None
) -> int:
    """
    Run the wizard for parsed arguments.

    Args:
        args: Parsed command line arguments
        config: Effective configuration
        console: Console for questions and status (stderr if not provided)
        stdin: Stream answers are read from (the terminal if not provided)
        stdout: Stream the document is printed to when no output filename is set

    Returns:
        Process exit code
    """
    console = console or make_console(stderr=True)
    stdout = stdout or sys.stdout

    store, template_path = load_session(args)
    wizard = Wizard(store, Prompter(store, console=console, stream=stdin))
    rendered = TemplateDriver(config.delimiters).render(template_path, wizard)

    if not wizard.output_filename:
        stdout.write(rendered)
        stdout.flush()
        return 0

    paths = write_outputs(rendered, store, wizard.output_filename)
    console.print(Text(f"Wrote {paths.tex_file}", style="success"))
    console.print(Text(f"Saved answers to {paths.values_file}", style="muted"))

    renderer = config.renderer
    if args.no_render or not renderer.enabled:
        return 0

    runner = RendererRunner(renderer.command, renderer.args, renderer.passes)
    results = runner.run(paths.tex_file, template_path, paths.output_dir)
    if results and not all(r.success for r in results):
        console.print(Text(
            f"{renderer.command} failed; {paths.tex_file.name} and the answers were kept",
            style="warning_msg"
        ))

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    console = make_console(stderr=True)

    try:
        ConfigManager.reset()
        config = get_config(args.config)
        if args.log_level:
            config.update_logging(level=args.log_level)
        setup_logging(config.logging.level, console)
        return run(args, config, console=console)
    except OutputWriteError as e:
        logger.debug(f"Output failed: {e!r}")
        console.print(Text(
            WriteFailureHandler.format_error_with_remediation(str(e), e.remediation_steps),
            style="error_msg"
        ), soft_wrap=True)
        return 1
    except TexlateError as e:
        logger.debug(f"Fatal error: {e!r}")
        console.print(Text(f"Error: {e}", style="error_msg"), soft_wrap=True)
        return 1
    except KeyboardInterrupt:
        console.print("\nInterrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
