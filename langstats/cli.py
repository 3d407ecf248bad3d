"""
Command-line and GitHub Actions entry point.

Reads settings from the environment (and a local .env file), renders the
language statistics and patches them into a README between markers.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import uuid
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from .config import Settings
from .github import GitHubClient, GitHubError
from .readme import MarkerNotFound, update_document
from .render import render
from .service import InvalidUsername, NoLanguageData, build_report

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="langstats",
        description="Write normalized GitHub language statistics into a README.",
    )
    parser.add_argument("--username", help="GitHub login to report on")
    parser.add_argument("--token", help="GitHub token (defaults to PAT / GITHUB_TOKEN)")
    parser.add_argument("--readme", help="document to patch between markers")
    parser.add_argument("--format", choices=["text", "html", "svg"], dest="output_format")
    parser.add_argument("--output", help="write the rendered artifact here instead of patching")
    parser.add_argument("--size-weight", type=float)
    parser.add_argument("--count-weight", type=float)
    parser.add_argument(
        "--exclude", action="append", default=None, metavar="REPO",
        help="repository to skip, may be repeated",
    )
    return parser.parse_args(argv)


def merge_settings(settings: Settings, args: argparse.Namespace) -> Settings:
    overrides = {
        "username": args.username,
        "github_token": args.token,
        "readme_path": args.readme,
        "output_format": args.output_format,
        "size_weight": args.size_weight,
        "count_weight": args.count_weight,
        "exclude_repos": args.exclude,
    }
    data = settings.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)


def write_outputs(outputs: Dict[str, object], path: Optional[str] = None) -> None:
    """Append step outputs to the GITHUB_OUTPUT file, if there is one."""
    path = path or os.environ.get("GITHUB_OUTPUT")
    if not path:
        for name, value in outputs.items():
            text = str(value)
            if "\n" in text:
                text = f"{len(text)} characters"
            logger.info("output %s: %s", name, text)
        return

    with open(path, "a", encoding="utf-8") as fh:
        for name, value in outputs.items():
            text = "" if value is None else str(value)
            if "\n" in text or "\r" in text:
                delim = f"EOF_{uuid.uuid4().hex}"
                fh.write(f"{name}<<{delim}\n{text}\n{delim}\n")
            else:
                fh.write(f"{name}={text}\n")


def run(settings: Settings, output: Optional[str] = None, client: Optional[GitHubClient] = None) -> str:
    if not settings.username:
        raise InvalidUsername("Input required and not supplied: username")
    if not settings.github_token and client is None:
        logger.warning("No GitHub token configured, only public data within anonymous rate limits")

    client = client or GitHubClient(token=settings.github_token)
    report = build_report(
        client,
        settings.username,
        settings.size_weight,
        settings.count_weight,
        settings.exclude_repos,
    )
    artifact = render(report, settings.output_format)

    if output:
        Path(output).write_text(artifact + "\n", encoding="utf-8")
        logger.info("Wrote %s", output)
    else:
        update_document(Path(settings.readme_path).resolve(), artifact)

    write_outputs({
        "stats-html": artifact,
        "languages-count": len(report.languages),
        "repositories-count": report.total_repos,
    })
    return artifact


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)

    # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        settings = merge_settings(Settings.from_env(), args)
        run(settings, output=args.output)
    except ValidationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    except (GitHubError, InvalidUsername, NoLanguageData, MarkerNotFound, OSError) as exc:
        logger.error("Action failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
