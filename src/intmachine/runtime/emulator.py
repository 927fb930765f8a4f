import sys
from pathlib import Path
import logging as lg
import tomllib
from typing import Iterable, Tuple

import click

from intmachine.common.settings import RunSettings
from intmachine.source.loader import LoadError, load_program
from intmachine.runtime.errors import MachineError
import intmachine.runtime.cpu as cpu


EXIT_HALT = 0
EXIT_LOAD_ERROR = 1
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100


def execute(
    memory: list[int], inputs: Iterable[int] = (), dump_memory: bool = False,
    trace: bool = False
) -> list[int]:
    proc = cpu.IntMachine(memory, inputs, trace=trace)

    try:
        return proc.run_to_completion(dump_memory)
    finally:
        if trace:
            proc.debug_dump()


def format_values(values: list[int]) -> str:
    return ','.join(str(v) for v in values)


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-c', '--config', type=click.Path(exists=True, path_type=Path), help='TOML settings file')
@click.option('-i', '--input', 'inputs', type=int, multiple=True, help='Input value, may repeat')
@click.option('--dump', is_flag=True, help='Print final memory instead of outputs')
@click.option('--trace', is_flag=True, help='Log every executed instruction')
@click.argument('program_filename', type=Path)
def run(
    verbose: bool, config: Path | None, inputs: Tuple[int], dump: bool,
    trace: bool, program_filename: Path
):
    settings = RunSettings()

    if config is not None:
        try:
            settings.load(config)
        except (UserWarning, tomllib.TOMLDecodeError) as e:
            raise click.BadParameter(str(e), param_hint='--config') from e

    settings.update(
        verbose=verbose or None,
        trace=trace or None,
        dump_memory=dump or None,
        inputs=list(inputs) if inputs else None
    )

    lg.basicConfig(level=lg.DEBUG if settings.verbose or settings.trace else lg.INFO)
    lg.info('INTMACHINE')

    try:
        memory = load_program(program_filename)
    except (LoadError, OSError) as e:
        lg.error(f'Cannot load {program_filename}: {e}')
        sys.exit(EXIT_LOAD_ERROR)

    try:
        result = execute(memory, settings.inputs, settings.dump_memory, settings.trace)
        click.echo(format_values(result))
        sys.exit(EXIT_HALT)

    except MachineError as e:
        lg.error(f'Execution halted on {type(e).__name__} at IP:{e.ip}: {e}')
        sys.exit(EXIT_EXEC_ERROR)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)


if __name__ == '__main__':
    run()
