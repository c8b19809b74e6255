"""
hackasm - Hack Assembler Command-Line Interface
===============================================

This module implements the command-line interface for the Hack assembler.

Usage Examples
--------------
Basic assembly (writes Prog.hack next to Prog.asm):
    $ hackasm Prog.asm

With output file:
    $ hackasm Prog.asm -o out.hack

Generate all output files:
    $ hackasm Prog.asm -o Prog.hack -l Prog.lst -s Prog.sym

Verbose mode (prints the symbol table):
    $ hackasm -v Prog.asm
"""

import logging
from pathlib import Path
from typing import Optional

import click

from hack_sdk import __version__
from hack_sdk.assembler import Assembler
from hack_sdk.cli.errors import handle_cli_exception


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output .hack file (default: input.hack)",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "--strict-labels",
    is_flag=True,
    help="Treat a label defined more than once as an error "
         "(default: the last definition wins)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackasm")
def main(
    input_file: Path,
    output: Optional[Path],
    listing: Optional[Path],
    symbols: Optional[Path],
    strict_labels: bool,
    verbose: bool,
) -> None:
    """
    Assemble Hack assembly source into Hack machine code.

    INPUT_FILE is the assembly source file (.asm) to assemble.

    The output contains one 16-character binary word per instruction.
    Nothing is written if the source contains an error.

    \b
    Examples:
        hackasm Max.asm              # Outputs Max.hack
        hackasm Max.asm -o out.hack  # Specify output file
        hackasm -v Max.asm           # Show symbol table
    """
    setup_logging(verbose)
    output_file = output if output is not None else input_file.with_suffix(".hack")

    asm = Assembler(verbose=verbose, strict_labels=strict_labels)

    try:
        asm.assemble_file(input_file)

        asm.write_hack(output_file)

        if listing:
            asm.write_listing(listing)

        if symbols:
            asm.write_symbols(symbols)

        if verbose:
            table = asm.get_symbol_table()
            click.echo("\nLabels:")
            for name, value in table.labels().items():
                click.echo(f"{name:<50} {value}")
            click.echo("\nVariables:")
            for name, value in table.variables().items():
                click.echo(f"{name:<50} {value}")
            click.echo(f"\nAssembly complete: {asm.get_instruction_count()} instructions")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
