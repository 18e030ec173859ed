#!/usr/bin/env python3
"""
MiniC command line front end.

Usage:
    minic <stage> [FILE] [options]

Stages:
    tokens      Token listing
    ast         AST printout with semantic diagnostics
    ir          Generated IR
    optimize    Constant-folded IR
    run         Execution result extracted from the folded IR
    native      Run main through LLVM (or print assembly with --asm)

Source is read from FILE, or from standard input when FILE is omitted
or "-".
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from . import __version__
from .config import DEFAULT_CONFIG, CompilerConfig
from . import pipeline

STAGES = ("tokens", "ast", "ir", "optimize", "run", "native")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minic",
        description="MiniC pipeline: print the output of one compilation stage",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    minic tokens prog.c                 # Token listing
    minic ast prog.c --watch total      # Tree, diagnostics, value of 'total'
    minic optimize prog.c               # Folded IR
    echo 'int main(){ return 7; }' | minic run
    minic native prog.c --asm           # Target assembly
        """
    )

    parser.add_argument('stage', choices=STAGES,
                        help='Pipeline stage whose output is printed')
    parser.add_argument('file', nargs='?', default='-',
                        help='Source file (default: standard input)')

    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging verbosity (default: WARNING)')
    parser.add_argument('--watch', metavar='NAME',
                        help='Report this variable from the reference interpreter (ast stage)')
    parser.add_argument('--known-function', metavar='NAME', action='append', default=[],
                        help='Accept NAME as a defined function (repeatable)')
    parser.add_argument('--asm', action='store_true',
                        help='With the native stage: print assembly instead of running')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    return parser


def build_config(args: argparse.Namespace) -> CompilerConfig:
    config = DEFAULT_CONFIG.with_known_functions(args.known_function)
    if args.watch:
        config = replace(config, watch_variable=args.watch)
    return config


def read_source(path: str) -> str:
    if path == '-':
        return sys.stdin.read()
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def run_stage(stage: str, source: str, config: CompilerConfig, asm: bool = False) -> str:
    """Output text of one stage for `source`."""
    if stage == 'tokens':
        return pipeline.run_lexer(source)
    if stage == 'ast':
        return pipeline.run_ast(source, config)
    if stage == 'ir':
        return pipeline.run_ir(source, config)
    if stage == 'optimize':
        return pipeline.run_optimized_ir(pipeline.run_ir(source, config), config)
    if stage == 'run':
        return pipeline.run_codegen(source, config) + "\n"
    if asm:
        return pipeline.run_assembly(source, config)
    return pipeline.run_native(source, config) + "\n"


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the minic command"""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        source = read_source(args.file)
    except OSError as e:
        print(f"minic: cannot read {args.file}: {e}", file=sys.stderr)
        return 1

    config = build_config(args)

    if args.stage == 'ast' and args.watch:
        result = pipeline.compile_source(source, config)
        sys.stdout.write(result.ast_report)
        if args.watch in result.environment:
            print(f"Value of {args.watch}: {result.environment[args.watch]}")
        return 0

    sys.stdout.write(run_stage(args.stage, source, config, asm=args.asm))
    return 0


if __name__ == "__main__":
    sys.exit(main())
