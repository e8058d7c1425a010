"""
imagepub — command line entry point.

  imagepub publish [--mode nightly|release] [--from-event] [--dry-run] [--allow-overwrite]
  imagepub plan [--mode ...] [--version X | --properties FILE] [--output text|json|github]

Exit codes: 0 success or skipped, 1 external tool failure, 2 invalid input.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Iterable

from imagepub import __version__
from imagepub.core.config import load_settings
from imagepub.errors import ExternalToolFailure, PublishError
from imagepub.models.publish import PublishRequest
from imagepub.release.properties import read_version
from imagepub.release.selector import build_args_for, select_for_request
from imagepub.release.trigger import load_event
from imagepub.utils.logging import logger

EXIT_OK = 0
EXIT_TOOL_FAILURE = 1
EXIT_INVALID_INPUT = 2


def parse_args(argv: Iterable[str]) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="imagepub",
        description="Build and publish the nightly or release container image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
EXAMPLES:
    # Scheduled run (nightly)
    %(prog)s publish

    # Manual dispatch, mode taken from the runner's event payload
    %(prog)s publish --from-event

    # Show the tag a release would get
    %(prog)s plan --mode release --properties gradle.properties

ENVIRONMENT VARIABLES:
    AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY   ECR credentials (required to publish)
    DOCKER_USERNAME, DOCKER_PASSWORD           Docker Hub credentials (required to publish)
    AWS_REGION                                 ECR region (default: us-east-2)
    PUBLISH_IMAGE                              Image repository (default: deepjavalibrary/djl-spark)
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    publish_parser = subparsers.add_parser("publish", help="Build the wheel and publish the image")
    publish_parser.add_argument("--mode", default="", help="nightly (default) or release")
    publish_parser.add_argument(
        "--from-event", action="store_true", help="Read the mode from GITHUB_EVENT_NAME / GITHUB_EVENT_PATH"
    )
    publish_parser.add_argument("--root", default=".", help="Repository root (default: .)")
    publish_parser.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    publish_parser.add_argument(
        "--allow-overwrite", action="store_true", help="Push a release tag even if it already exists"
    )

    plan_parser = subparsers.add_parser("plan", help="Print the tag a run would publish")
    plan_parser.add_argument("--mode", default="", help="nightly (default) or release")
    source = plan_parser.add_mutually_exclusive_group()
    source.add_argument("--version", dest="release_version", help="Version for a release tag")
    source.add_argument("--properties", help="Properties file to read the version from")
    plan_parser.add_argument("--output", choices=["text", "json", "github"], default="text", help="Output format")

    return parser.parse_args(list(argv))


def cmd_publish(args: argparse.Namespace) -> int:
    from imagepub.pipeline.orchestrator import PublishOrchestrator

    settings = load_settings()
    event = load_event(os.environ)
    mode = event.mode if args.from_event else args.mode

    orchestrator = PublishOrchestrator(
        raw_mode=mode,
        settings=settings,
        repository=event.repository,
        dry_run=args.dry_run,
        allow_overwrite=args.allow_overwrite,
        root=args.root,
    )
    result = orchestrator.run()
    print(result.model_dump_json(indent=2))
    return EXIT_OK


def cmd_plan(args: argparse.Namespace) -> int:
    settings = load_settings()
    version = args.release_version
    if args.properties:
        version = read_version(args.properties, settings.version_key)

    request = PublishRequest.create(args.mode, version)
    selection = select_for_request(request, settings.image.image)

    if args.output == "json":
        print(json.dumps({
            "mode": request.mode.value,
            "tag": selection.tag,
            "push": selection.push,
            "build_args": build_args_for(request),
        }))
    elif args.output == "github":
        print(f"tag={selection.tag}")
        print(f"push={'true' if selection.push else 'false'}")
    else:
        print(selection.tag)
    return EXIT_OK


def main(argv: Iterable[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(sys.argv[1:] if argv is None else argv)

    if not args.command:
        print("ERROR: Command is required. Use --help for usage information.", file=sys.stderr)
        return EXIT_INVALID_INPUT

    handlers = {"publish": cmd_publish, "plan": cmd_plan}
    try:
        return handlers[args.command](args)
    except ExternalToolFailure as exc:
        logger.error("Publish aborted: %s", exc.message)
        print(json.dumps(exc.to_dict()), file=sys.stderr)
        return EXIT_TOOL_FAILURE
    except PublishError as exc:
        logger.error("Publish rejected: %s", exc.message)
        print(json.dumps(exc.to_dict()), file=sys.stderr)
        return EXIT_INVALID_INPUT


if __name__ == "__main__":
    sys.exit(main())
