import logging as lg

import pytest

from intmachine.common.ops import Op
from intmachine.runtime.errors import InputStarved
import intmachine.runtime.cpu as cpu

from unit_utils import run_machine, load_test_program


@pytest.mark.parametrize('program,expected', [
    ([1, 0, 0, 0, 99], [2, 0, 0, 0, 99]),
    ([2, 3, 0, 3, 99], [2, 3, 0, 6, 99]),
    ([2, 4, 4, 5, 99, 0], [2, 4, 4, 5, 99, 9801]),
    ([1, 1, 1, 4, 99, 5, 6, 0, 99], [30, 1, 1, 4, 2, 5, 6, 0, 99]),
    ([1, 9, 10, 3, 2, 3, 11, 0, 99, 30, 40, 50], [3500, 9, 10, 70, 2, 3, 11, 0, 99, 30, 40, 50]),
])
def test_add_multiply(program, expected):
    assert run_machine(program, dump_memory=True) == expected


def test_parameter_modes():
    assert run_machine([1002, 4, 3, 4, 33], dump_memory=True) == [1002, 4, 3, 4, 99]
    assert run_machine([1101, 100, -1, 4, 0], dump_memory=True) == [1101, 100, -1, 4, 99]


def test_immediate_write_target_writes_own_cell():
    assert run_machine([11101, 2, 3, 0, 99], dump_memory=True) == [11101, 2, 3, 5, 99]


def test_input_output():
    assert run_machine([3, 0, 4, 0, 99], [-42]) == [-42]


@pytest.mark.parametrize('program,value,expected', [
    ([3, 9, 8, 9, 10, 9, 4, 9, 99, -1, 8], 8, [1]),
    ([3, 9, 8, 9, 10, 9, 4, 9, 99, -1, 8], 7, [0]),
    ([3, 9, 7, 9, 10, 9, 4, 9, 99, -1, 8], 7, [1]),
    ([3, 9, 7, 9, 10, 9, 4, 9, 99, -1, 8], 8, [0]),
    ([3, 3, 1108, -1, 8, 3, 4, 3, 99], 8, [1]),
    ([3, 3, 1108, -1, 8, 3, 4, 3, 99], 9, [0]),
    ([3, 3, 1107, -1, 8, 3, 4, 3, 99], 5, [1]),
    ([3, 3, 1107, -1, 8, 3, 4, 3, 99], 8, [0]),
])
def test_comparisons(program, value, expected):
    assert run_machine(program, [value]) == expected


@pytest.mark.parametrize('program', [
    [3, 12, 6, 12, 15, 1, 13, 14, 13, 4, 13, 99, -1, 0, 1, 9],
    [3, 3, 1105, -1, 9, 1101, 0, 0, 12, 4, 12, 99, 1],
])
@pytest.mark.parametrize('value,expected', [(0, [0]), (1, [1]), (-5, [1])])
def test_jumps(program, value, expected):
    assert run_machine(program, [value]) == expected


@pytest.mark.parametrize('value,expected', [(7, [999]), (8, [1000]), (9, [1001])])
def test_compare_to_eight(value, expected):
    assert run_machine(load_test_program('compare_to_eight'), [value]) == expected


def test_every_operation_has_a_handler():
    assert set(cpu.IntMachine.HANDLERS) == set(Op) - {Op.HLT}


def test_single_step():
    proc = cpu.IntMachine([1101, 2, 3, 7, 4, 7, 99, 0])

    assert proc.exec_next() is None
    assert proc.ip == 4
    assert proc.memory[7] == 5

    assert proc.exec_next() == 5
    assert proc.ip == 6

    assert proc.exec_next() is None
    assert proc.state == cpu.State.HALTED
    assert proc.ip == 6

    assert proc.exec_next() is None
    assert proc.run_to_completion() == [5]


def test_single_step_on_halt():
    proc = cpu.IntMachine([99])

    assert proc.exec_next() is None
    assert proc.state == cpu.State.HALTED
    assert proc.run_until_output_or_halt() == cpu.Halted([99], [])


def test_single_step_fault_is_recorded():
    proc = cpu.IntMachine([3, 0, 99])

    with pytest.raises(InputStarved) as e:
        proc.exec_next()

    assert e.value.ip == 0
    assert proc.ip == 0
    assert proc.state == cpu.State.FAULTED
    assert proc.fault is e.value

    with pytest.raises(InputStarved) as again:
        proc.run_to_completion()

    assert again.value is e.value


def test_halt_stops_execution():
    proc = cpu.IntMachine([99, 104, 1, 99])

    assert proc.run_to_completion() == []
    assert proc.state == cpu.State.HALTED
    assert proc.ip == 0


def test_trace(caplog):
    with caplog.at_level(lg.DEBUG):
        cpu.IntMachine([1001, 4, -2, 5, 99, 0], trace=True).run_to_completion()

    assert '@0: ADD [4] #-2 [5]' in caplog.text
    assert 'Machine halted at IP:4' in caplog.text
