"""
Command-line entrypoint: convert an ANTLR v4 grammar to Markdown or EBNF.

Usage:
    grammar-converter Expr.g4 -o docs/grammar.md --divs
    grammar-converter Expr.g4 --ebnf > expr.ebnf
    cat Expr.g4 | python -m grammar_converter - --ebnf

Exit codes:
    0 success, 1 conversion failure (syntax error, unrecognized atom, empty
    rule body), 2 configuration or IO failure.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from grammar_converter.core.errors import ConversionError
from grammar_converter.core.render import to_common_ebnf, to_markdown
from grammar_converter.io.antlr import parse_rules
from grammar_converter.io.config import ConverterSettings
from grammar_converter.io.errors import GrammarSyntaxError, IoError
from grammar_converter.io.output import read_source, write_output

logger = logging.getLogger("grammar_converter")

EXIT_OK = 0
EXIT_CONVERSION = 1
EXIT_IO = 2


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="grammar-converter",
        description="Convert an ANTLR v4 grammar (.g4) to Markdown or EBNF.",
    )
    p.add_argument(
        "input",
        nargs="?",
        default=None,
        help=".g4 file ('-' or omitted reads standard input).",
    )
    p.add_argument("-m", "--markdown", action="store_true", help="Output markdown (default).")
    p.add_argument("-e", "--ebnf", action="store_true", help="Output EBNF (wins over --markdown).")
    p.add_argument(
        "-d",
        "--divs",
        action="store_true",
        default=None,
        help="Wrap markdown rules in anchored div elements.",
    )
    p.add_argument(
        "-o",
        "--output",
        default=None,
        help="Destination file ('-' or omitted writes standard output).",
    )
    p.add_argument("--config", default=None, help="Explicit TOML settings file.")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return p


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s", stream=sys.stderr)
    logger.setLevel(level)


def resolve_settings(args: argparse.Namespace) -> ConverterSettings:
    """Apply CLI flags on top of loaded settings (CLI > env > TOML > defaults)."""
    s = ConverterSettings.load(args.config)
    if args.ebnf:
        s = replace(s, output_format="ebnf")
    elif args.markdown:
        s = replace(s, output_format="markdown")
    if args.divs is not None:
        s = replace(s, divs=args.divs)
    if args.verbose:
        s = replace(s, log_level="DEBUG")
    return s


def render(text: str, settings: ConverterSettings) -> str:
    """Parse grammar source and render it in the configured output format."""
    rules = parse_rules(text)
    if settings.output_format == "ebnf":
        return to_common_ebnf(rules)
    return to_markdown(rules, divs=settings.divs)


def run(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)

    try:
        settings = resolve_settings(args)
    except IoError as e:
        _configure_logging("WARNING")
        logger.error("%s", e)
        return EXIT_IO
    _configure_logging(settings.log_level)
    logger.debug("settings: %s", settings)

    try:
        text = read_source(args.input, encoding=settings.encoding)
    except (OSError, UnicodeDecodeError, LookupError) as e:
        logger.error("cannot read %s: %s", args.input or "<stdin>", e)
        return EXIT_IO

    try:
        output = render(text, settings)
    except (GrammarSyntaxError, ConversionError, ValueError) as e:
        logger.error("conversion failed: %s", e)
        return EXIT_CONVERSION

    try:
        write_output(output, args.output, encoding=settings.encoding)
    except IoError as e:
        logger.error("%s", e)
        return EXIT_IO
    return EXIT_OK


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    raise SystemExit(run(argv))


if __name__ == "__main__":
    main()
