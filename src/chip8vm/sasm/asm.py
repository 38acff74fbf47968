from pathlib import Path
import logging as lg

import click
import pyparsing as pp

from chip8vm.sasm.fpp import FPP, AsmError
import chip8vm.sasm.grammar as grammar


def compile_source(contents: str) -> bytes:
    # First pass
    first_pass = FPP()

    try:
        actions = grammar.program.parse_string(contents, parse_all=True)
    except pp.ParseException as e:
        raise AsmError(f'Syntax error at line {e.lineno}, column {e.col}: {e.line.strip()}') from e

    for (func, arg) in actions:  # type: ignore
        func(first_pass, arg)

    # Second pass
    return first_pass.emit()


def compile_file(input: Path) -> bytes:
    lg.info(f'Assembling {input.name}')
    return compile_source(input.read_text())


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('source', type=Path)
@click.argument('binary', type=Path, required=False)
def compile(verbose: bool, source: Path, binary: Path | None):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('CHIP-8 ASM')

    if not binary:
        binary = source.with_suffix('.ch8')

    try:
        bytestr = compile_file(source)
    except AsmError as e:
        raise click.ClickException(str(e))

    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(bytestr)
    lg.info(f'Wrote {len(bytestr)} bytes to {binary.name}')


if __name__ == '__main__':
    compile()
