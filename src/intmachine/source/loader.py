''' Program source grammar '''

from pathlib import Path
import logging as lg

import pyparsing as pp


class LoadError(Exception):
    pass


integer = pp.Regex('[+-]?[0-9]+').set_parse_action(lambda r: int(r[0]))
line = integer + pp.ZeroOrMore(pp.Suppress(',') + integer)

# Lines are concatenated in order
program = pp.OneOrMore(line)


def parse_program(text: str) -> list[int]:
    try:
        values = program.parse_string(text, parse_all=True)
    except pp.ParseException as e:
        raise LoadError(f'Malformed program at line {e.lineno}, column {e.col}: {e.msg}') from e

    return [int(v) for v in values]


def load_program(filepath: str | Path) -> list[int]:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Loading program {filepath}')
    memory = parse_program(filepath.read_text())
    lg.debug(f'Loaded {len(memory)} cells')
    return memory
