"""Command-line interface for devcover.

Examples
--------
Cover the icons, run a build command, then restore the icons:
    $ devcover build project.yaml -- ./gradlew assembleDebug

Preview the cover on a single image:
    $ devcover combine icon.png --cover CoverForDevelopment.png -o covered.png

Open the desktop window:
    $ devcover gui project.yaml
"""
from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from PIL import Image

from . import __version__
from .core.compositor import combine_with_cover
from .core.cover import CoverImage
from .core.errors import DevCoverError
from .core.pipeline import BuildPipeline, BuildReport, OverwriteIconsProcessor
from .core.processor import IconSetManager

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devcover",
        description="Stamp a development cover over application icons during builds.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Run a build command with covered icons")
    build.add_argument("project", type=Path, help="Project file")
    build.add_argument("build_command", nargs=argparse.REMAINDER, help="Command to run, after --")

    combine = subparsers.add_parser("combine", help="Blend the cover over one image")
    combine.add_argument("source", type=Path, help="Image to cover")
    combine.add_argument("--cover", type=Path, required=True, help="Cover image")
    combine.add_argument("-o", "--output", type=Path, required=True, help="Output PNG path")

    gui = subparsers.add_parser("gui", help="Open the desktop window")
    gui.add_argument("project", type=Path, nargs="?", help="Project file to open")

    return parser


def run_build(project: Path, command: List[str]) -> BuildReport:
    """Overwrite the project's icons, run ``command`` and revert the icons."""
    manager = IconSetManager.for_project(project)
    pipeline = BuildPipeline(manager.build_target, [OverwriteIconsProcessor(manager)])

    def step(report: BuildReport) -> None:
        logger.info("Running %s", " ".join(command))
        subprocess.run(command, check=True)

    return pipeline.build(step)


def combine_file(source: Path, cover: Path, output: Path) -> Path:
    with Image.open(source) as image:
        combined = combine_with_cover(image, CoverImage(cover).image)
    output.parent.mkdir(parents=True, exist_ok=True)
    combined.save(output, format="PNG")
    return output


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    try:
        if args.command == "build":
            command = list(args.build_command)
            if command and command[0] == "--":
                command = command[1:]
            if not command:
                parser.error("build requires a command after --")
            run_build(args.project, command)
        elif args.command == "combine":
            written = combine_file(args.source, args.cover, args.output)
            print(written)
        elif args.command == "gui":
            from .app import main as gui_main

            return gui_main(args.project)
    except DevCoverError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    except subprocess.CalledProcessError as exc:
        print(f"Error: build command exited with status {exc.returncode}", file=sys.stderr)
        return exc.returncode or 1
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
