"""Command-line front end for the document service.

Usage:
    docsync list [--sync]
    docsync search QUERY
    docsync add PATH [--name NAME]
    docsync delete ID
    docsync stats
    docsync sync
    docsync clear
    docsync login

Configuration comes from DOCSYNC_* environment variables (see docsync.config);
--token and the --oauth-* flags override them.
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, Optional, Sequence

from docsync.auth import OAuthClient
from docsync.config import (
    ENV_API_TOKEN,
    ENV_OAUTH_CLIENT_SECRETS,
    ENV_OAUTH_TOKEN_FILE,
    DocSyncConfig,
)
from docsync.errors import AuthError, DocSyncError, ValidationError
from docsync.models import DocumentRecord, UploadFile
from docsync.service import DocumentService
from docsync.util.time import to_timestamp

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID = 2


def _setup_logging(*, verbose: bool) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root_logger.addHandler(handler)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="docsync", description="Local-first document sync")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    parser.add_argument("--token", default=None, help="static bearer token")
    parser.add_argument(
        "--oauth-client-secrets", default=None, help="Google OAuth client secrets JSON"
    )
    parser.add_argument("--oauth-token-file", default=None, help="Google OAuth token JSON")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="list documents")
    p_list.add_argument("--sync", action="store_true", help="force a sync first")

    p_search = sub.add_parser("search", help="search documents")
    p_search.add_argument("query")

    p_add = sub.add_parser("add", help="add a PDF file")
    p_add.add_argument("path")
    p_add.add_argument("--name", default=None, help="display name")

    p_delete = sub.add_parser("delete", help="delete a document")
    p_delete.add_argument("id")

    sub.add_parser("stats", help="show collection statistics")
    sub.add_parser("sync", help="force a reconciliation pass")
    sub.add_parser("clear", help="wipe the local cache")
    sub.add_parser("login", help="run the OAuth consent flow and store the token")
    return parser


def _jsonable(value: Any) -> Any:
    if isinstance(value, DocumentRecord):
        return value.to_dict()
    if isinstance(value, datetime):
        return to_timestamp(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


async def _dispatch(service: DocumentService, args: argparse.Namespace) -> Any:
    if args.command == "list":
        return await service.list_all(force_sync=args.sync)
    if args.command == "search":
        return await service.search(args.query)
    if args.command == "add":
        try:
            file = UploadFile.from_path(args.path)
        except OSError as exc:
            raise ValidationError(f"Cannot read {args.path}: {exc}", rule="missing", cause=exc) from exc
        return await service.add(file, custom_name=args.name)
    if args.command == "delete":
        return {"deleted": await service.delete(args.id)}
    if args.command == "stats":
        return await service.stats()
    if args.command == "sync":
        return await service.force_sync()
    if args.command == "clear":
        await service.clear_cache()
        return {"cleared": True}
    raise ValueError(f"Unknown command: {args.command}")


def _config_from_args(args: argparse.Namespace) -> DocSyncConfig:
    env = dict(os.environ)
    overrides = {
        ENV_API_TOKEN: args.token,
        ENV_OAUTH_CLIENT_SECRETS: args.oauth_client_secrets,
        ENV_OAUTH_TOKEN_FILE: args.oauth_token_file,
    }
    env.update({key: value for key, value in overrides.items() if value})
    return DocSyncConfig.from_env(env)


async def _login(config: DocSyncConfig) -> Any:
    if config.auth is None or config.auth.kind != "oauth":
        raise AuthError(
            "login needs --oauth-client-secrets and --oauth-token-file "
            f"(or {ENV_OAUTH_CLIENT_SECRETS} and {ENV_OAUTH_TOKEN_FILE})"
        )
    client = OAuthClient(config.auth)
    # The consent flow blocks on a local redirect server.
    await asyncio.to_thread(client.get_credentials)
    return {"authorized": True, "token_file": config.auth.token_file}


async def _run(args: argparse.Namespace, config: DocSyncConfig) -> Any:
    if args.command == "login":
        return await _login(config)
    async with DocumentService.from_config(config) as service:
        result = await _dispatch(service, args)
        # A one-shot process waits for its mirrors before exiting.
        await service.wait_for_mirrors()
        for failure in service.drain_mirror_errors():
            log.warning("%s", failure.describe())
        return result


def main(argv: Optional[Sequence[str]] = None, *, config: Optional[DocSyncConfig] = None) -> int:
    args = _build_parser().parse_args(argv)
    _setup_logging(verbose=args.verbose)

    try:
        result = asyncio.run(_run(args, config or _config_from_args(args)))
    except ValidationError as exc:
        print(f"invalid input ({exc.rule}): {exc}", file=sys.stderr)
        return EXIT_INVALID
    except DocSyncError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    print(json.dumps(_jsonable(result), indent=2, ensure_ascii=False))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
