from __future__ import annotations

import logging
import os
import sys
from importlib.resources import files
from pathlib import Path

USAGE = "Usage: crpt-api init | crpt-api create <document.yaml> [--sign SIGNATURE]"

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_RATE_LIMITED = 2


def _init_config() -> None:
    """Copy bundled config templates to the user's config directory."""
    from crpt.config import get_config_dir

    config_dir = get_config_dir()
    templates = files("crpt") / "templates"
    config_dir.mkdir(parents=True, exist_ok=True)

    copied = 0
    for rel in ["settings.yaml.example", "document.yaml.example"]:
        dest = config_dir / rel
        if dest.exists():
            print(f"  already exists: {dest}")
            continue
        src = templates / rel
        with src.open("rb") as f:
            dest.write_bytes(f.read())
        print(f"  created: {dest}")
        copied += 1

    print()
    print(f"Config: {config_dir}")
    print()
    if copied:
        print("Next steps:")
        print(f"  1. cp {config_dir / 'settings.yaml.example'} {config_dir / 'settings.yaml'}")
        print("  2. Fill in a document file based on document.yaml.example")
        print("  3. Run: crpt-api create <document.yaml>")
    else:
        print("No new files created (all already existed).")


def _parse_create_args(args: list[str]) -> tuple[Path, str] | None:
    """Return (document path, signature) or None when the arguments are invalid."""
    signature = ""
    positional: list[str] = []
    it = iter(args)
    for arg in it:
        if arg == "--sign":
            signature = next(it, None)
            if signature is None:
                return None
        else:
            positional.append(arg)
    if len(positional) != 1:
        return None
    return Path(positional[0]), signature


def _create(args: list[str]) -> int:
    from crpt.config import load_document, load_settings
    from crpt.models.document import Document
    from crpt.services.document_client import DocumentClient
    from crpt.services.exceptions import CrptError
    from crpt.services.rate_limiter import TimeUnit
    from yaml import YAMLError

    parsed = _parse_create_args(args)
    if parsed is None:
        print(USAGE)
        return EXIT_ERROR
    path, signature = parsed

    if not path.is_file():
        print(f"Error: document file not found: {path}")
        return EXIT_ERROR

    try:
        settings = load_settings()
        time_unit = TimeUnit.parse(settings["time_unit"])
        document = Document.from_dict(load_document(path))
    except (KeyError, TypeError, ValueError, YAMLError) as e:
        print(f"Error: invalid configuration or document: {e}")
        return EXIT_ERROR

    try:
        with DocumentClient(time_unit, settings["request_limit"]) as client:
            submitted = client.create_document(document, signature)
    except CrptError as e:
        print(f"Error: {e}")
        return EXIT_ERROR

    if not submitted:
        print(f"Rate limit reached ({settings['request_limit']} per {settings['time_unit']}).")
        return EXIT_RATE_LIMITED
    print(f"Document {document.doc_id} submitted.")
    return EXIT_OK


def _log_level() -> str:
    """Level name from CRPT_LOG_LEVEL; unknown names fall back to INFO."""
    level = os.environ.get("CRPT_LOG_LEVEL", "INFO").strip().upper()
    if level not in logging.getLevelNamesMapping():
        return "INFO"
    return level


def main() -> None:
    """Entry point for the crpt-api CLI."""
    logging.basicConfig(
        level=_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    args = sys.argv[1:]
    if args and args[0] == "init":
        _init_config()
        return
    if args and args[0] == "create":
        sys.exit(_create(args[1:]))

    print(USAGE)
    sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
