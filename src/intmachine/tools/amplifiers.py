''' Amplifier chains and feedback networks of machines '''

import sys
from itertools import permutations
from pathlib import Path
import logging as lg
from typing import Sequence

import click

from intmachine.source.loader import LoadError, load_program
from intmachine.runtime.errors import MachineError
from intmachine.runtime.emulator import EXIT_LOAD_ERROR, EXIT_EXEC_ERROR
import intmachine.runtime.cpu as cpu


class NoSignal(Exception):
    pass


def run_chain(program: list[int], phases: Sequence[int], signal: int = 0) -> int:
    for phase in phases:
        proc = cpu.IntMachine(list(program), [phase, signal])
        outputs = proc.run_to_completion()

        if not outputs:
            raise NoSignal(f'Amplifier with phase {phase} produced no output')

        signal = outputs[0]

    return signal


def run_feedback_loop(program: list[int], phases: Sequence[int], signal: int = 0) -> int:
    machines = [cpu.IntMachine(list(program), [phase]) for phase in phases]
    emitted = False

    while True:
        for proc in machines:
            result = proc.run_until_output_or_halt([signal])

            if isinstance(result, cpu.Halted):
                if not emitted:
                    raise NoSignal('Feedback loop halted before producing a signal')

                return signal

            signal = result.value
            emitted = True


def max_signal(
    program: list[int], phases: Sequence[int], feedback: bool = False
) -> tuple[int, tuple[int, ...]]:
    runner = run_feedback_loop if feedback else run_chain
    best: tuple[int, tuple[int, ...]] | None = None

    for ordering in permutations(phases):
        signal = runner(program, ordering)
        lg.debug(f'Phases {ordering} -> {signal}')

        if best is None or signal > best[0]:
            best = (signal, ordering)

    if best is None:
        raise NoSignal('No phase settings to try')

    return best


def parse_phases(ctx, param, value: str | None) -> list[int] | None:
    if value is None:
        return None

    try:
        return [int(p) for p in value.split(',')]
    except ValueError:
        raise click.BadParameter(f'Expected comma-separated integers, got {value}') from None


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--feedback', is_flag=True, help='Wire the amplifiers into a feedback loop')
@click.option('--phases', callback=parse_phases, default=None,
              help='Phase settings to permute, defaults to 0-4 or 5-9 with --feedback')
@click.argument('program_filename', type=Path)
def amplify(verbose: bool, feedback: bool, phases: list[int] | None, program_filename: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('INTMACHINE AMPLIFIERS')

    if phases is None:
        phases = list(range(5, 10)) if feedback else list(range(0, 5))

    try:
        program = load_program(program_filename)
        signal, ordering = max_signal(program, phases, feedback)

    except (LoadError, OSError) as e:
        lg.error(f'Cannot load {program_filename}: {e}')
        sys.exit(EXIT_LOAD_ERROR)

    except (MachineError, NoSignal) as e:
        lg.error(f'Amplifier failure: {e}')
        sys.exit(EXIT_EXEC_ERROR)

    click.echo(f'Max signal: {signal}')
    click.echo(f'Phases: {",".join(str(p) for p in ordering)}')


if __name__ == '__main__':
    amplify()
