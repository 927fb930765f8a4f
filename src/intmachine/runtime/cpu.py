import logging as lg
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, TypeAlias

from intmachine.common.ops import Op
from intmachine.runtime.errors import Halt, MachineError, InputStarved
from intmachine.runtime.memory import Memory, check_address, write_at
from intmachine.runtime.decoder import Instruction, decode


class State(Enum):
    RUNNING = 'running'
    HALTED = 'halted'
    FAULTED = 'faulted'


@dataclass(frozen=True)
class Output:
    value: int


@dataclass(frozen=True)
class Halted:
    memory: list[int]
    outputs: list[int]


RunResult: TypeAlias = Output | Halted


class IntMachine():
    ip: int                 # Instruction pointer
    next_ip: int            # Pointer committed after the current instruction
    memory: Memory
    inputs: deque[int]      # Pending input values
    outputs: list[int]      # Emitted output values
    state: State
    fault: MachineError | None
    trace: bool

    def __init__(self, memory: Memory, inputs: Iterable[int] = (), trace: bool = False):
        self.memory = memory    # Owned; callers clone shared programs

        self.ip = 0
        self.next_ip = 0
        self.inputs = deque(inputs)
        self.outputs = []
        self.state = State.RUNNING
        self.fault = None
        self.trace = trace

    # - Helpers - #

    def debug_dump(self):
        lg.debug(
            f'IP:{self.ip} {self.state.name} '
            f'IN:{list(self.inputs)} OUT:{self.outputs}'
        )

    def store(self, ins: Instruction, value: int):
        address = ins.result_address
        assert address is not None
        write_at(self.memory, address, value)

    def arithm_pair(self, ins: Instruction, op: Callable[[int, int], int]):
        a = ins.arguments[0].get(self.memory)
        b = ins.arguments[1].get(self.memory)
        self.store(ins, op(a, b))

    def jump_if(self, ins: Instruction, cond: Callable[[int], bool]):
        val = ins.arguments[0].get(self.memory)
        addr = ins.arguments[1].get(self.memory)

        if cond(val):
            self.next_ip = addr

    # - Operations - #

    def add(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: a + b)

    def mul(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: a * b)

    def inp(self, ins: Instruction):
        if not self.inputs:
            raise InputStarved()

        address = ins.result_address
        assert address is not None
        check_address(self.memory, address)
        self.store(ins, self.inputs.popleft())

    def out(self, ins: Instruction) -> int:
        val = ins.arguments[0].get(self.memory)
        self.outputs.append(val)
        return val

    def jit(self, ins: Instruction):
        self.jump_if(ins, lambda v: v != 0)

    def jif(self, ins: Instruction):
        self.jump_if(ins, lambda v: v == 0)

    def les(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: 1 if a < b else 0)

    def eql(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: 1 if a == b else 0)

    # Halt never reaches dispatch, the decoder raises it
    HANDLERS: dict[Op, Callable[['IntMachine', Instruction], int | None]] = {
        Op.ADD: add,
        Op.MUL: mul,
        Op.INP: inp,
        Op.OUT: out,
        Op.JIT: jit,
        Op.JIF: jif,
        Op.LES: les,
        Op.EQL: eql
    }

    # -- Implementation -- #

    def step(self) -> int | None:
        ins = decode(self.memory, self.ip)

        if self.trace:
            lg.debug(f'@{self.ip}: {ins}')

        self.next_ip = self.ip + ins.size
        handler = self.HANDLERS[ins.op]
        emitted = handler(self, ins)
        self.ip = self.next_ip
        return emitted

    def exec_next(self) -> int | None:
        if self.state == State.FAULTED:
            assert self.fault is not None
            raise self.fault

        if self.state == State.HALTED:
            return None

        try:
            return self.step()

        except Halt:
            self.state = State.HALTED
            lg.info(f'Machine halted at IP:{self.ip}')
            return None

        except MachineError as e:
            e.ip = self.ip
            self.state = State.FAULTED
            self.fault = e
            lg.error(f'Machine fault at IP:{self.ip}: {e}')
            self.debug_dump()
            raise

    def execute(self, break_at_output: bool) -> Output | None:
        if self.state == State.FAULTED:
            assert self.fault is not None
            raise self.fault

        while self.state == State.RUNNING:
            emitted = self.exec_next()

            if break_at_output and emitted is not None:
                return Output(emitted)

        return None

    def run_to_completion(self, dump_memory: bool = False) -> list[int]:
        self.execute(break_at_output=False)

        if dump_memory:
            return list(self.memory)

        return list(self.outputs)

    def run_until_output_or_halt(self, input_values: Iterable[int] = ()) -> RunResult:
        self.inputs.extend(input_values)
        result = self.execute(break_at_output=True)

        if result is not None:
            return result

        return Halted(list(self.memory), list(self.outputs))
