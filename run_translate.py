from __future__ import annotations

import argparse
import copy
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv

from html_translate import storage
from html_translate.languages import describe_languages, resolve_language
from html_translate.translator import (
    API_KEY_ENV,
    API_KEY_URL,
    GEMINI_OPENAI_BASE_URL,
    MissingApiKeyError,
    ProviderError,
    TranslationRequest,
    TranslatorConfig,
    build_translator,
    translate_request,
)
from html_translate.utils import setup_logger


DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    "translation": {
        "provider": "gemini",
        "model": "gemini-2.5-flash",
        "temperature": 0.3,
        "max_output_tokens": None,
        "base_url": GEMINI_OPENAI_BASE_URL,
    },
    "languages": {
        "default_source": "tr",
        "default_target": "nl",
    },
    "paths": {
        "logs_dir": None,
    },
}


class UsageError(ValueError):
    """Raised when the positional arguments do not match the expected shape."""


class ConfigurationError(RuntimeError):
    """Raised when the config file cannot be loaded."""


class CliParser(argparse.ArgumentParser):
    """ArgumentParser whose errors share the exit path of a wrong argument count."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def load_config(path: Optional[str]) -> Dict[str, Dict[str, Any]]:
    """Merge an optional JSON config over DEFAULT_CONFIG, section by section."""
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    if not path:
        return cfg
    try:
        data = storage.read_json(path)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Cannot load config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Cannot load config {path}: top level must be a JSON object.")
    for section, values in data.items():
        if section not in cfg:
            cfg[section] = values
            continue
        if not isinstance(values, dict):
            raise ConfigurationError(f"Cannot load config {path}: section '{section}' must be a JSON object.")
        cfg[section].update(values)
    for key in ("default_source", "default_target"):
        code = cfg["languages"].get(key)
        if not isinstance(code, str) or not code.strip():
            raise ConfigurationError(f"Cannot load config {path}: languages.{key} must be a language code.")
    if not isinstance(cfg["translation"].get("provider"), str):
        raise ConfigurationError(f"Cannot load config {path}: translation.provider must be a string.")
    return cfg


def build_parser(prog: str, default_pair: bool = False) -> argparse.ArgumentParser:
    if default_pair:
        positional = "[source-lang target-lang] source-file output-file"
        pair_note = (
            "Language codes may be omitted; languages.default_source and\n"
            "languages.default_target from the config are used (tr -> nl by default).\n\n"
        )
    else:
        positional = "source-lang target-lang source-file output-file"
        pair_note = ""

    epilog = (
        "Arguments:\n"
        "  source-lang   Source language code (e.g., tr, en, de)\n"
        "  target-lang   Target language code (e.g., nl, en, fr)\n"
        "  source-file   Path to the source HTML file\n"
        "  output-file   Path for the translated output file\n\n"
        f"{pair_note}"
        "Environment:\n"
        f"  {API_KEY_ENV}  Required. Your Google Gemini API key (a .env file is honoured).\n"
        f"                  Get one at: {API_KEY_URL}\n\n"
        "Examples:\n"
        f"  {prog} tr nl input.html output-nl.html\n"
        f"  {prog} en de page.html page-de.html\n\n"
        "Supported language codes:\n"
        f"  {describe_languages()}\n"
        "  ...and any other language code supported by Gemini"
    )
    parser = CliParser(
        prog=prog,
        usage=f"%(prog)s [options] {positional}",
        description="Translate HTML files using Google Gemini.",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("positionals", nargs="*", metavar="ARG", help=argparse.SUPPRESS)
    parser.add_argument("--config", type=str, default=None, help="Path to a JSON config file")
    parser.add_argument("--provider", choices=["gemini", "dummy"], default=None, help="Translation provider")
    parser.add_argument("--model", type=str, default=None, help="Model name (default: gemini-2.5-flash)")
    parser.add_argument("--temperature", type=float, default=None, help="Sampling temperature")
    parser.add_argument("--log-dir", type=str, default=None, help="Also write logs to <dir>/app.log")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def check_arguments(positionals: List[str], default_pair: bool = False) -> None:
    if len(positionals) == 4 or (default_pair and len(positionals) == 2):
        return
    expected = "2 or 4" if default_pair else "4"
    raise UsageError(f"Expected {expected} positional arguments, got {len(positionals)}.")


def resolve_arguments(
    positionals: List[str],
    cfg: Dict[str, Dict[str, Any]],
    default_pair: bool = False,
) -> Tuple[str, str, str, str]:
    """Return (source code, target code, source file, output file)."""
    check_arguments(positionals, default_pair)
    if len(positionals) == 4:
        src, tgt, source_file, output_file = positionals
        return src, tgt, source_file, output_file
    langs = cfg["languages"]
    source_file, output_file = positionals
    return langs["default_source"], langs["default_target"], source_file, output_file


def build_translator_config(cfg: Dict[str, Dict[str, Any]], args: argparse.Namespace) -> TranslatorConfig:
    tcfg = cfg["translation"]
    temperature = args.temperature if args.temperature is not None else tcfg.get("temperature")
    max_tokens = tcfg.get("max_output_tokens")
    return TranslatorConfig(
        model=args.model or tcfg.get("model") or "gemini-2.5-flash",
        temperature=float(temperature) if temperature is not None else None,
        max_output_tokens=int(max_tokens) if max_tokens is not None else None,
        base_url=tcfg.get("base_url") or GEMINI_OPENAI_BASE_URL,
    )


def _report_missing_key(logger: logging.Logger) -> None:
    logger.error("Error: %s environment variable is not set", API_KEY_ENV)
    logger.error("Please set it with: export %s=your-api-key", API_KEY_ENV)
    logger.error("Get your API key from: %s", API_KEY_URL)


def run(argv: Optional[List[str]] = None, prog: str = "html-translate", default_pair: bool = False) -> None:
    parser = build_parser(prog, default_pair=default_pair)
    try:
        args = parser.parse_args(argv)
        check_arguments(args.positionals, default_pair)
    except UsageError as exc:
        print(parser.format_help())
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1)

    try:
        cfg = load_config(args.config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1)
    src_code, tgt_code, source_file, output_file = resolve_arguments(args.positionals, cfg, default_pair)

    logger = setup_logger(
        args.log_dir or cfg["paths"].get("logs_dir"),
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    load_dotenv()
    provider = (args.provider or cfg["translation"].get("provider") or "gemini").lower()
    api_key = os.getenv(API_KEY_ENV, "").strip()
    if provider == "gemini" and not api_key:
        _report_missing_key(logger)
        raise SystemExit(1)

    source = resolve_language(src_code)
    target = resolve_language(tgt_code)

    try:
        translator = build_translator(
            provider,
            build_translator_config(cfg, args),
            api_key=api_key,
            target_code=target.code,
        )
    except MissingApiKeyError:
        _report_missing_key(logger)
        raise SystemExit(1)
    except ValueError as exc:
        logger.error("Error: %s", exc)
        raise SystemExit(1)

    try:
        logger.info("Reading HTML file: %s", source_file)
        html_text = storage.read_text(source_file)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Error: cannot read %s: %s", source_file, exc)
        raise SystemExit(1)

    request = TranslationRequest(source_language=source, target_language=target, html_body=html_text)
    try:
        logger.info("Translating HTML from %s to %s (%s)...", source.name, target.name, provider)
        result = translate_request(request, translator, logger=logger)
    except ProviderError as exc:
        logger.error("Error: %s", exc)
        if exc.is_credential_error:
            logger.error("Please check your %s is valid", API_KEY_ENV)
        raise SystemExit(1)

    try:
        logger.info("Writing translated HTML to: %s", output_file)
        storage.write_text(output_file, result.normalized_html)
    except OSError as exc:
        logger.error("Error: cannot write %s: %s", output_file, exc)
        raise SystemExit(1)

    logger.info("Translation completed successfully! Output saved to: %s", output_file)


def main(argv: Optional[List[str]] = None) -> None:
    run(argv, prog="html-translate")


def main_default_pair(argv: Optional[List[str]] = None) -> None:
    run(argv, prog="html-translate-default", default_pair=True)


if __name__ == "__main__":
    main()
