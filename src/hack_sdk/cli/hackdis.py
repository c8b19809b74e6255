"""
hackdis - Hack Disassembler Command-Line Interface
==================================================

Disassembles .hack machine-code text back into Hack assembly.

Usage Examples
--------------
Listing with addresses and words:
    $ hackdis Prog.hack

Plain assembly that reassembles to the same words:
    $ hackdis Prog.hack --no-address -o Prog.dis.asm

Limit number of instructions:
    $ hackdis Prog.hack --count 20
"""

import logging
from pathlib import Path
from typing import Optional

import click

from hack_sdk import __version__
from hack_sdk.disassembler import HackDisassembler, parse_hack
from hack_sdk.cli.errors import handle_cli_exception

logger = logging.getLogger(__name__)


@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "-c", "--count",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum number of instructions to disassemble (default: all)",
)
@click.option(
    "--no-address",
    is_flag=True,
    help="Omit addresses and words (output is plain assembly)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackdis")
def main(
    input_file: Path,
    output: Optional[Path],
    count: Optional[int],
    no_address: bool,
    verbose: bool,
) -> None:
    """
    Disassemble Hack machine code.

    INPUT_FILE is a .hack file with one 16-character binary word per line.

    \b
    Examples:
        hackdis Max.hack
        hackdis Max.hack --no-address -o Max.dis.asm
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")

    try:
        words = parse_hack(input_file.read_text())
        logger.debug(f"Read {len(words)} words from {input_file}")

        disasm = HackDisassembler()
        instructions = disasm.disassemble(words, count=count)
        text = disasm.disassemble_to_text(words, count=count, show_address=not no_address)

        invalid = sum(1 for instr in instructions if not instr.valid)
        if invalid:
            click.echo(f"Warning: {invalid} word(s) could not be decoded", err=True)

        if output:
            output.write_text(text + "\n")
            if verbose:
                click.echo(f"Wrote {len(instructions)} instructions to {output}")
        else:
            click.echo(text)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Disassembly")


if __name__ == "__main__":
    main()
