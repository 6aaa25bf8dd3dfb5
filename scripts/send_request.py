#!/usr/bin/env python3
"""
Send a single request through RequestBuilder

Usage:
  python scripts/send_request.py <METHOD> <URI> [--base-uri <url>] [--format query|form_params|json|multipart]
                                 [--body <json>] [--defaults <json>] [--header "Name: value"]...
                                 [--file <field>=<path>]... [--timeout-sec <sec>] [--debug] [--json-logs]

Examples:
  python scripts/send_request.py GET /search --base-uri https://httpbin.org --body '{"q":"ann"}'
  python scripts/send_request.py post /anything --base-uri https://httpbin.org --format json --body '{"x":1}'
  python scripts/send_request.py POST /anything --format multipart --body '{"user":{"name":"Ann"}}' --file user.avatar=pic.png

Base URI, timeout and log level default to REQUEST_BASE_URI / REQUEST_TIMEOUT_SEC /
REQUEST_LOG_LEVEL (environment or .env).
--json-logs also prints every builder and transport event as one JSON line on stdout.
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

import requests

from application.ports.logger import LoggerPort
from application.request_builder import RequestBuilder
from domain.exceptions import EncodingError
from domain.request_format import RequestFormat
from infrastructure.config.env_settings import ClientSettings
from infrastructure.files.local_file_ref import LocalFileRef
from infrastructure.logging.composite_logger import CompositeLogger
from infrastructure.logging.console_logger import ConsoleLogger
from infrastructure.logging.log_setup import setup_console_logging
from infrastructure.logging.loguru_logger import LoguruLogger

TEXT_HEAD_LEN = 2000


def _parse_json_payload(raw: Optional[str], label: str) -> Optional[dict]:
    if raw is None:
        return None
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON for {label}: {exc}") from exc
    if not isinstance(parsed, dict):
        raise ValueError(f"{label} must be a JSON object")
    return parsed


def _parse_headers(raw_headers: List[str]) -> Optional[Dict[str, str]]:
    if not raw_headers:
        return None
    headers: Dict[str, str] = {}
    for raw in raw_headers:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise ValueError(f"Header must look like 'Name: value', got: {raw!r}")
        headers[name.strip()] = value.strip()
    return headers


def _attach_files(body: Dict[str, Any], raw_files: List[str]) -> Dict[str, Any]:
    # "user.avatar=pic.png" => body["user"]["avatar"] = LocalFileRef("pic.png")
    for raw in raw_files:
        field, sep, path = raw.partition("=")
        if not sep or not field or not path:
            raise ValueError(f"File must look like 'field=path', got: {raw!r}")
        node = body
        *parents, leaf = field.split(".")
        for part in parents:
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                raise ValueError(f"Cannot attach file under non-object field: {part}")
            node = child
        node[leaf] = LocalFileRef(path)
    return body


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send one HTTP request")
    parser.add_argument("method", type=str)
    parser.add_argument("uri", type=str)
    parser.add_argument("--base-uri", type=str)
    parser.add_argument("--format", type=str, choices=[f.value for f in RequestFormat], default="query")
    parser.add_argument("--body", type=str)
    parser.add_argument("--defaults", type=str)
    parser.add_argument("--header", action="append", default=[])
    parser.add_argument("--file", action="append", default=[])
    parser.add_argument("--timeout-sec", type=float)
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--json-logs", action="store_true")
    return parser


def _build_logger(args: argparse.Namespace, settings: ClientSettings) -> LoggerPort:
    if not args.json_logs:
        return LoguruLogger()
    return CompositeLogger([LoguruLogger(), ConsoleLogger(min_level=settings.log_level.lower())])


def _send(args: argparse.Namespace, settings: ClientSettings) -> int:
    body = _parse_json_payload(args.body, "body")
    if args.file:
        body = _attach_files(body or {}, args.file)

    options: Optional[Dict[str, Any]] = None
    if args.timeout_sec is not None:
        options = {"timeout": args.timeout_sec}

    with RequestBuilder(settings=settings, logger=_build_logger(args, settings)) as builder:
        return _dispatch(builder, args, body, options)


def _dispatch(
    builder: RequestBuilder,
    args: argparse.Namespace,
    body: Optional[Dict[str, Any]],
    options: Optional[Dict[str, Any]],
) -> int:
    if args.base_uri:
        builder.make(args.base_uri)

    builder.to(args.uri).with_(
        body=body,
        headers=_parse_headers(args.header),
        options=options,
    ).with_param_default(_parse_json_payload(args.defaults, "defaults"))

    fmt = RequestFormat(args.format)
    if fmt is RequestFormat.FORM_PARAMS:
        builder.as_form_params()
    elif fmt is RequestFormat.JSON:
        builder.as_json()
    elif fmt is RequestFormat.MULTIPART:
        builder.as_multipart()
    else:
        builder.as_query()

    if args.debug:
        builder.debug(sys.stdout)

    response = builder.request(args.method)
    print(f"HTTP {response.status} {response.reason or ''}".rstrip())
    print(response.text[:TEXT_HEAD_LEN])
    return 0 if response.status < 400 else 1


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args(sys.argv[1:])

    try:
        settings = ClientSettings.from_env()
        setup_console_logging(level=settings.log_level)
        exit_code = _send(args, settings)
    except (ValueError, EncodingError) as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)
    except requests.RequestException as exc:
        print(f"ERROR: request failed: {exc}")
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
