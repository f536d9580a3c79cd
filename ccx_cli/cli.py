"""Command-line entry point for ccx-cli.

Usage::

    ccx init my-app --react --ts
    ccx init my-app            # asks for framework and language
    python -m ccx_cli init my-app -v -j
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from . import __version__
from .config import Settings
from .console import RichPrompter, RichReporter, console, print_error, print_success
from .fetcher import TemplateFetcher
from .installer import DependencyInstaller
from .models import Framework, Language, WorkflowResult
from .workflow import InitWorkflow

EXIT_CANCELLED = 130


def build_parser() -> argparse.ArgumentParser:
    """Create the ``ccx`` argument parser with its ``init`` subcommand."""
    parser = argparse.ArgumentParser(
        prog="ccx",
        description="ccx-cli -- create React or Vue projects from templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  ccx init my-app --react --ts\n"
            "  ccx init my-app -v -j\n"
            "  ccx init my-app\n"
        ),
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"ccx-cli {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True

    init = subparsers.add_parser("init", help="Create a new project from a template")
    init.add_argument("project_name", metavar="projectName", help="Name of the project directory")

    frameworks = init.add_mutually_exclusive_group()
    frameworks.add_argument(
        "-r", "--react",
        dest="framework", action="store_const", const=Framework.REACT,
        help="Use the React template",
    )
    frameworks.add_argument(
        "-v", "--vue",
        dest="framework", action="store_const", const=Framework.VUE,
        help="Use the Vue template",
    )

    languages = init.add_mutually_exclusive_group()
    languages.add_argument(
        "-t", "--ts",
        dest="language", action="store_const", const=Language.TS,
        help="Use TypeScript",
    )
    languages.add_argument(
        "-j", "--js",
        dest="language", action="store_const", const=Language.JS,
        help="Use JavaScript",
    )
    return parser


def build_workflow(settings: Settings) -> InitWorkflow:
    """Wire the workflow to the terminal, the network and npm."""
    return InitWorkflow(
        prompter=RichPrompter(),
        reporter=RichReporter(),
        fetcher=TemplateFetcher(settings.template),
        installer=DependencyInstaller(settings.install),
        settings=settings,
    )


async def run_init(
    args: argparse.Namespace,
    workflow: InitWorkflow,
    cwd: Path | None = None,
) -> WorkflowResult:
    """Run ``init`` for parsed *args*."""
    return await workflow.run(
        args.project_name,
        framework=args.framework,
        language=args.language,
        cwd=cwd,
    )


def main(argv: list[str] | None = None, workflow: InitWorkflow | None = None) -> None:
    """CLI entry point for ``ccx`` and ``python -m ccx_cli``."""
    args = build_parser().parse_args(argv)
    workflow = workflow or build_workflow(Settings())

    try:
        result = asyncio.run(run_init(args, workflow))
    except (KeyboardInterrupt, EOFError):
        console.print()
        print_error("Cancelled.")
        sys.exit(EXIT_CANCELLED)

    if result.success:
        print_success(f"Project {args.project_name} is ready.")
    sys.exit(result.exit_code)


if __name__ == "__main__":
    main()
