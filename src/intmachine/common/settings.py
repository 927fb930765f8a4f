from pathlib import Path
import logging as lg
import tomllib


class RunSettings:
    verbose: bool
    trace: bool
    dump_memory: bool
    inputs: list[int]

    def __init__(self):
        self.verbose = False
        self.trace = False
        self.dump_memory = False
        self.inputs = []

    def update(
        self,
        verbose: bool | None = None,
        trace: bool | None = None,
        dump_memory: bool | None = None,
        inputs: list[int] | None = None
    ):
        if verbose is not None:
            self.verbose = verbose

        if trace is not None:
            self.trace = trace

        if dump_memory is not None:
            self.dump_memory = dump_memory

        if inputs is not None:
            self.inputs = list(inputs)

        return self

    def load(self, filepath: str | Path):
        if isinstance(filepath, str):
            filepath = Path(filepath)

        lg.debug(f'Loading settings from {filepath}')
        config = tomllib.loads(filepath.read_text())
        machine = config.get('machine', {})

        if not isinstance(machine, dict):
            raise UserWarning(f'Machine settings must be a table, got {machine!r}')

        unknown = set(machine) - {'verbose', 'trace', 'dump_memory', 'inputs'}

        if unknown:
            raise UserWarning(f'Unknown machine settings {sorted(unknown)}')

        for flag in ('verbose', 'trace', 'dump_memory'):
            if flag in machine and not isinstance(machine[flag], bool):
                raise UserWarning(f'Machine setting {flag} must be a boolean, got {machine[flag]!r}')

        inputs = machine.get('inputs')

        if inputs is not None and not isinstance(inputs, list):
            raise UserWarning(f'Machine inputs must be a list, got {inputs!r}')

        if inputs is not None and not all(type(i) is int for i in inputs):
            raise UserWarning(f'Machine inputs must be integers, got {inputs}')

        return self.update(
            verbose=machine.get('verbose'),
            trace=machine.get('trace'),
            dump_memory=machine.get('dump_memory'),
            inputs=inputs
        )
