class Halt(Exception):
    pass


class MachineError(Exception):
    ip: int | None  # Instruction pointer of the faulting instruction

    def __init__(self, message: str):
        super().__init__(message)
        self.ip = None


class OutOfBounds(MachineError):
    address: int

    def __init__(self, address: int):
        super().__init__(f'Address {address} is out of bounds')
        self.address = address


class InvalidInstruction(MachineError):
    raw_value: int

    def __init__(self, raw_value: int):
        super().__init__(f'Invalid instruction {raw_value}')
        self.raw_value = raw_value


class InputStarved(MachineError):
    def __init__(self):
        super().__init__('Input requested while the input queue is empty')
