"""Command-line interface for typolink."""

import argparse
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from . import __version__
from .content.renderer import ContentRenderer
from .logging_config import setup_logging
from .models.config import LinkConfig, RenderConfig
from .models.link import LinkResult


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="typolink",
        description="Render a typolink parameter as an HTML anchor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # External url, opened in a new window
  typolink "typo3.org _blank" --text TYPO3

  # Spam protected email address
  typolink info@example.org --spam-protect 2

  # Only the url, or the structured result as JSON
  typolink fileadmin/report.pdf --return url
  typolink "typo3.org - btn \\"Visit us\\"" --return result

  # Site settings from a YAML file
  typolink 42 --config typolink.yaml
        """,
    )

    parser.add_argument(
        "parameter",
        help="Typolink parameter: target [window] [class] [\"title\"] [params]",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--text",
        "-t",
        default="",
        help="Link text (default: the link target)",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML file with site rendering settings",
    )

    # Link settings
    link_group = parser.add_argument_group("link settings")
    link_group.add_argument(
        "--ext-target",
        default=None,
        metavar="TARGET",
        help="Window target for external urls",
    )
    link_group.add_argument(
        "--title",
        default=None,
        help="Title attribute, overrides the title in the parameter",
    )
    link_group.add_argument(
        "--atag-params",
        default="",
        metavar="ATTRS",
        help="Extra anchor attributes, e.g. 'class=\"btn\" data-x=\"1\"'",
    )
    link_group.add_argument(
        "--spam-protect",
        type=int,
        default=None,
        metavar="OFFSET",
        help="Obfuscate email addresses with this character offset",
    )
    link_group.add_argument(
        "--return",
        choices=["html", "url", "result"],
        default="html",
        dest="return_last",
        help="Output anchor markup, the bare url or the result as JSON (default: html)",
    )

    # Output control
    output_group = parser.add_argument_group("output control")
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress warnings",
    )

    return parser


def load_config(args: argparse.Namespace) -> RenderConfig:
    """Build the site settings from the YAML file and command line overrides."""
    config = RenderConfig.from_yaml_file(args.config) if args.config else RenderConfig()

    overrides: dict = {}
    if args.spam_protect is not None:
        overrides["spam_protect_email_addresses"] = args.spam_protect
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    elif args.quiet:
        overrides["log_level"] = "ERROR"

    if overrides:
        config = RenderConfig.model_validate({**config.model_dump(), **overrides})
    return config


def run_typolink(args: argparse.Namespace) -> int:
    """Render the link described by the arguments."""
    console = Console()
    err_console = Console(stderr=True)

    try:
        config = load_config(args)
        conf = LinkConfig(
            parameter=args.parameter,
            ATagParams=args.atag_params,
            extTarget=args.ext_target,
            title=args.title,
            returnLast="result",
        )
    except (OSError, ValidationError) as e:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return 1

    setup_logging(config.log_level, str(config.log_file) if config.log_file else None)

    result = ContentRenderer(config).typolink(args.text, conf)
    if not isinstance(result, LinkResult):
        err_console.print(f"[red]Error:[/red] The link could not be generated for {escape(repr(args.parameter))}")
        return 1

    if args.return_last == "url":
        console.print(result.url, markup=False, emoji=False, highlight=False, soft_wrap=True)
    elif args.return_last == "result":
        console.print_json(result.to_json())
    else:
        console.print(result.to_html(), markup=False, emoji=False, highlight=False, soft_wrap=True)

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run_typolink(args)


if __name__ == "__main__":
    sys.exit(main())
