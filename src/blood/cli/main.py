# src/blood/cli/main.py
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from .. import __version__
from ..blood_token import EOF
from ..config import config
from ..error_reporter import BloodError, SourceError, print_error
from ..evaluator import Evaluator, evaluate, new_global_environment, is_error, NIL
from ..lexer import Lexer
from ..parser import Parser
from ..runtime import parse_file_flags, apply_file_flags

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger("blood.cli")


def _configure_logging():
    if not config.enable_debug_logs:
        return
    blood_logger = logging.getLogger("blood")
    if not blood_logger.handlers:
        blood_logger.addHandler(RichHandler(console=err_console, show_time=False, show_path=False))
    blood_logger.setLevel(getattr(logging, config.log_level.upper(), logging.DEBUG))


def _read_source(file):
    try:
        with open(file, 'r', encoding='utf-8') as f:
            return f.read()
    except UnicodeDecodeError as e:
        error = SourceError(f"{file} is not valid UTF-8 (invalid byte at offset {e.start})", filename=file)
    except OSError as e:
        error = SourceError(f"Cannot read {file}: {e.strerror or e}", filename=file)
    print_error(error, err_console)
    sys.exit(1)


def _parse_source(source, filename):
    lexer = Lexer(source, filename)
    parser = Parser(lexer)
    return parser.parse_program()


def _node_label(node):
    label = type(node).__name__
    details = []
    name = getattr(node, "name", None)
    if name is not None:
        details.append(getattr(name, "value", name))
    if getattr(node, "mutable", False):
        details.append("mod")
    operator = getattr(node, "operator", None)
    if operator is not None:
        details.append(repr(operator))
    parameters = getattr(node, "parameters", None)
    if parameters is not None:
        details.append("(" + ", ".join(p.value for p in parameters) + ")")
    if not node.children():
        return repr(node)
    return f"{label} {' '.join(str(d) for d in details)}".rstrip()


def _build_tree(node, tree):
    for child in node.children():
        _build_tree(child, tree.add(_node_label(child)))
    return tree


@click.group()
@click.version_option(version=__version__, prog_name="Blood")
@click.option('--debug', is_flag=True, help="Enable interpreter debug logging.")
def cli(debug):
    """Blood Programming Language - immutable by default, Lua-flavored"""
    if debug:
        config.enable_debug_logs = True
    _configure_logging()


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def run(file):
    """Run a Blood program"""
    source = _read_source(file)

    applied = apply_file_flags(config, parse_file_flags(source))
    if applied:
        _configure_logging()
        logger.debug("Applied file flags: %s", applied)

    try:
        program = _parse_source(source, file)
    except BloodError as e:
        print_error(e, err_console)
        sys.exit(1)

    logger.debug("Running %s (%d statements)", file, len(program.statements))
    result = evaluate(program, new_global_environment(), filename=file)
    if is_error(result):
        print_error(result, err_console)
        sys.exit(1)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def check(file):
    """Check syntax of a Blood file"""
    try:
        program = _parse_source(_read_source(file), file)
    except BloodError as e:
        err_console.print("[bold red]Syntax errors found:[/bold red]")
        print_error(e, err_console)
        sys.exit(1)

    console.print(f"[bold green]Syntax is valid![/bold green] ({len(program.statements)} statements)")


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def ast(file):
    """Show AST of a Blood file"""
    try:
        program = _parse_source(_read_source(file), file)
    except BloodError as e:
        print_error(e, err_console)
        sys.exit(1)

    tree = _build_tree(program, Tree(f"[bold]Program[/bold] ({len(program.statements)} statements)"))
    console.print(Panel.fit(
        tree,
        title="[bold blue]Abstract Syntax Tree[/bold blue]",
        border_style="blue"
    ))


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def tokens(file):
    """Show tokens of a Blood file"""
    table = Table(title="Tokens")
    table.add_column("Type", style="cyan")
    table.add_column("Literal", style="green")
    table.add_column("Line", style="yellow")
    table.add_column("Column", style="yellow")

    try:
        for token in Lexer(_read_source(file), file):
            if token.type == EOF:
                break
            table.add_row(token.type, token.literal, str(token.line), str(token.column))
    except BloodError as e:
        print_error(e, err_console)
        sys.exit(1)

    console.print(table)


@cli.command()
def repl():
    """Start Blood REPL"""
    env = new_global_environment()
    evaluator = Evaluator(filename="<repl>")
    console.print(f"[bold green]Blood REPL v{__version__}[/bold green]")
    console.print("Type 'exit' to quit\n")

    while True:
        try:
            code = console.input("[bold blue]>>> [/bold blue]")
        except (KeyboardInterrupt, EOFError):
            console.print("\nGoodbye!")
            break

        if code.strip() in ['exit', 'quit']:
            break
        if not code.strip():
            continue

        try:
            program = _parse_source(code, "<repl>")
        except BloodError as e:
            print_error(e, err_console)
            continue

        result = evaluate(program, env, evaluator=evaluator)
        if is_error(result):
            print_error(result, err_console)
        elif result is not NIL:
            console.print(f"[green]{result.inspect()}[/green]")


def main(argv=None):
    """Console entry point; ``blood FILE`` is shorthand for ``blood run FILE``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) == 1 and not args[0].startswith('-') and args[0] not in cli.commands:
        args.insert(0, 'run')
    return cli.main(args=args, prog_name="blood")


if __name__ == "__main__":
    main()
