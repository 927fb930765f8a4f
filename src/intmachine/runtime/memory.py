from typing import TypeAlias

from intmachine.runtime.errors import OutOfBounds


Memory: TypeAlias = list[int]


def check_address(memory: Memory, address: int):
    if address < 0 or address >= len(memory):
        raise OutOfBounds(address)


def read_at(memory: Memory, address: int) -> int:
    check_address(memory, address)
    return memory[address]


def write_at(memory: Memory, address: int, value: int):
    check_address(memory, address)
    memory[address] = value
