"""
CLI -- Command interface for the web-standard language backend

Commands:
    kram-web languages
    kram-web classify js "const answer = 42"
    kram-web classify svg - < fragment.svg
    kram-web collate workbook.yaml --out build/
    kram-web collate workbook.yaml --language js --json

collate classifies every fragment, runs the collators and either writes
the artifacts into --out or prints them. With --json a manifest
(names, modes, digests) is printed instead of artifact text.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import orjson

from . import __version__
from .config import ConfigManager
from .core.artifacts import Artifact, manifest_json
from .core.languages import LanguageRegistry, PLUGIN_DESCRIPTION, PLUGIN_DISPLAY_NAME
from .core.workbook import load_workbook
from .errors import KramError


logger = logging.getLogger(__name__)


def cmd_languages(registry: LanguageRegistry, args) -> int:
    print(f"{PLUGIN_DISPLAY_NAME}: {PLUGIN_DESCRIPTION}")
    for tag in registry.supported_languages():
        print(f"  {tag:<5} {registry.get(tag).name}")
    return 0


def cmd_classify(registry: LanguageRegistry, args) -> int:
    text = sys.stdin.read() if args.text == "-" else args.text
    verdict = registry.classify(args.language, text)
    print(orjson.dumps(verdict.to_dict()).decode())
    return 0


def cmd_collate(registry: LanguageRegistry, args) -> int:
    workbook = registry.classify_workbook(load_workbook(Path(args.workbook)))
    tags = args.language or registry.supported_languages()

    artifacts: List[Artifact] = []
    for tag in tags:
        artifacts.extend(registry.collate(tag, workbook))

    if args.out:
        out_dir = Path(args.out)
        out_dir.mkdir(parents=True, exist_ok=True)
        for artifact in artifacts:
            (out_dir / artifact.name).write_text(artifact.code, encoding="utf-8")
            logger.info("Wrote %s", out_dir / artifact.name)

    if args.json:
        print(manifest_json(artifacts, include_code=not args.out).decode())
    elif not args.out:
        for artifact in artifacts:
            print(f"--- {artifact.name} ({artifact.language}, {artifact.mode.value})")
            print(artifact.code)
    else:
        print(f"Wrote {len(artifacts)} artifact(s) to {args.out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kram-web",
        description="kram-web -- Web-standard language backend for kram workbooks",
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("KRAM_PROJECT_PATH", "."),
        help='Project directory holding .kram/config.yaml (default: KRAM_PROJECT_PATH or current)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log debug details to stderr'
    )
    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'kram-web {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    languages = subparsers.add_parser('languages', help='List supported languages')
    languages.set_defaults(handler=cmd_languages)

    classify = subparsers.add_parser('classify', help='Classify one fragment')
    classify.add_argument('language', help='Language tag (html, css, svg, js)')
    classify.add_argument('text', nargs='?', default='-', help="Fragment text, or '-' for stdin")
    classify.set_defaults(handler=cmd_classify)

    collate = subparsers.add_parser('collate', help='Collate a workbook into artifacts')
    collate.add_argument('workbook', help='Workbook document (YAML or JSON)')
    collate.add_argument('--language', '-l', action='append', help='Only this language (repeatable)')
    collate.add_argument('--out', '-o', help='Write artifacts into this directory')
    collate.add_argument('--json', action='store_true', help='Print a JSON manifest')
    collate.set_defaults(handler=cmd_collate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the kram-web CLI.

    Returns:
        Process exit code (0 success, 1 user error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    try:
        config = ConfigManager(Path(args.project)).load()
        registry = LanguageRegistry.web_standard(config.output)
        return args.handler(registry, args)
    except KramError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
