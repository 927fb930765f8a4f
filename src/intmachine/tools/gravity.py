''' Noun/verb search over patched programs '''

import sys
from pathlib import Path
import logging as lg

import click

from intmachine.source.loader import LoadError, load_program
from intmachine.runtime.errors import MachineError
from intmachine.runtime.memory import write_at
from intmachine.runtime.emulator import EXIT_HALT, EXIT_LOAD_ERROR, EXIT_EXEC_ERROR
import intmachine.runtime.cpu as cpu


NOUN_ADDRESS = 1
VERB_ADDRESS = 2
RESULT_ADDRESS = 0

DEFAULT_TARGET = 19690720
NOT_FOUND = 4


def run_with(program: list[int], noun: int, verb: int) -> int:
    memory = list(program)
    write_at(memory, NOUN_ADDRESS, noun)
    write_at(memory, VERB_ADDRESS, verb)
    return cpu.IntMachine(memory).run_to_completion(dump_memory=True)[RESULT_ADDRESS]


def find_noun_verb(program: list[int], target: int, limit: int = 99) -> tuple[int, int] | None:
    for noun in range(limit + 1):
        for verb in range(limit + 1):
            try:
                result = run_with(program, noun, verb)
            except MachineError as e:
                lg.debug(f'Noun {noun} verb {verb} faulted: {e}')
                continue

            if result == target:
                return noun, verb

    return None


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--noun', type=int, help='Run once with this noun')
@click.option('--verb', type=int, help='Run once with this verb')
@click.option('--target', type=int, default=DEFAULT_TARGET, show_default=True,
              help='Search for the noun and verb producing this value')
@click.option('--limit', type=int, default=99, show_default=True, help='Largest noun and verb to try')
@click.argument('program_filename', type=Path)
def gravity(
    verbose: bool, noun: int | None, verb: int | None, target: int, limit: int,
    program_filename: Path
):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('INTMACHINE GRAVITY ASSIST')

    if (noun is None) != (verb is None):
        raise click.UsageError('--noun and --verb must be given together')

    try:
        program = load_program(program_filename)
    except (LoadError, OSError) as e:
        lg.error(f'Cannot load {program_filename}: {e}')
        sys.exit(EXIT_LOAD_ERROR)

    if len(program) <= VERB_ADDRESS:
        lg.error(f'Program is too short to patch, {len(program)} cells')
        sys.exit(EXIT_LOAD_ERROR)

    if noun is not None and verb is not None:
        try:
            click.echo(run_with(program, noun, verb))
        except MachineError as e:
            lg.error(f'Execution halted on {type(e).__name__} at IP:{e.ip}: {e}')
            sys.exit(EXIT_EXEC_ERROR)

        sys.exit(EXIT_HALT)

    found = find_noun_verb(program, target, limit)

    if found is None:
        lg.info(f'No noun and verb up to {limit} produce {target}')
        sys.exit(NOT_FOUND)

    noun, verb = found
    click.echo(f'Noun: {noun}, verb: {verb}')
    click.echo(f'100 * noun + verb = {100 * noun + verb}')


if __name__ == '__main__':
    gravity()
