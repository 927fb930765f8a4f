from enum import IntEnum


class Op(IntEnum):
    ADD = 1     # A1 +  A2 -> [A3]
    MUL = 2     # A1 *  A2 -> [A3]
    INP = 3     # input -> [A1]
    OUT = 4     # A1 -> output
    JIT = 5     # if A1 .ne 0 jmp A2
    JIF = 6     # if A1 .eq 0 jmp A2
    LES = 7     # A1 .lt A2 -> [A3]
    EQL = 8     # A1 .eq A2 -> [A3]
    HLT = 99


class Mode(IntEnum):
    POSITION = 0
    IMMEDIATE = 1


OPCODE_BASE = 100   # opcode occupies the two lowest decimal digits
MODE_BASE = 10      # one decimal digit per argument mode

ARGUMENT_COUNTS = {
    Op.ADD: 3,
    Op.MUL: 3,
    Op.INP: 1,
    Op.OUT: 1,
    Op.JIT: 2,
    Op.JIF: 2,
    Op.LES: 3,
    Op.EQL: 3,
    Op.HLT: 0
}

# Operations whose last argument is a write target
WRITES_RESULT = frozenset([Op.ADD, Op.MUL, Op.INP, Op.LES, Op.EQL])
