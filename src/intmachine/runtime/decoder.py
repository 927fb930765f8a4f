''' Instruction decoder '''

from dataclasses import dataclass

from intmachine.common.ops import Op, Mode, OPCODE_BASE, MODE_BASE, ARGUMENT_COUNTS, WRITES_RESULT
from intmachine.runtime.errors import Halt, InvalidInstruction
from intmachine.runtime.memory import Memory, read_at


@dataclass(frozen=True)
class Argument:
    value: int      # Raw cell contents
    mode: Mode
    position: int   # Address of the cell the argument was read from

    def get(self, memory: Memory) -> int:
        if self.mode == Mode.IMMEDIATE:
            return self.value

        return read_at(memory, self.value)

    def target(self) -> int:
        # Immediate write target means the argument's own cell
        if self.mode == Mode.IMMEDIATE:
            return self.position

        return self.value

    def __str__(self) -> str:
        if self.mode == Mode.IMMEDIATE:
            return f'#{self.value}'

        return f'[{self.value}]'


@dataclass(frozen=True)
class Instruction:
    op: Op
    arguments: tuple[Argument, ...]

    @property
    def size(self) -> int:
        return 1 + len(self.arguments)

    @property
    def result_address(self) -> int | None:
        if self.op not in WRITES_RESULT:
            return None

        return self.arguments[-1].target()

    def __str__(self) -> str:
        return ' '.join([self.op.name] + [str(a) for a in self.arguments])


def decode_op(raw: int) -> Op:
    if raw < 0:
        raise InvalidInstruction(raw)

    try:
        return Op(raw % OPCODE_BASE)
    except ValueError:
        raise InvalidInstruction(raw) from None


def decode_mode(raw: int, index: int) -> Mode:
    digit = (raw // OPCODE_BASE // MODE_BASE ** index) % MODE_BASE

    try:
        return Mode(digit)
    except ValueError:
        raise InvalidInstruction(raw) from None


def decode(memory: Memory, ip: int) -> Instruction:
    '''
    Decodes the instruction at ip without touching the machine state.
    Raises Halt for the halt opcode, OutOfBounds or InvalidInstruction
    when the instruction cannot be read.
    '''

    raw = read_at(memory, ip)
    op = decode_op(raw)

    if op == Op.HLT:
        raise Halt()

    arguments = []

    for i in range(ARGUMENT_COUNTS[op]):
        position = ip + 1 + i
        mode = decode_mode(raw, i)
        arguments.append(Argument(read_at(memory, position), mode, position))

    return Instruction(op, tuple(arguments))
