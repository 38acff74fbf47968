import logging as lg

from chip8vm.common.hwconf import (
    MEMORY_SIZE, FONT_BASE, ROM_BASE, ROM_CAPACITY, STACK_DEPTH
)


FONT = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])


class VMError(Exception):
    pass


class MemoryViolation(VMError):
    def __init__(self, address: int):
        super().__init__(f'Memory access out of range at 0x{address:X}')
        self.address = address


class StackOverflow(VMError):
    pass


class StackUnderflow(VMError):
    pass


class RomTooLarge(VMError):
    def __init__(self, size: int, capacity: int):
        super().__init__(f'ROM of {size} bytes exceeds {capacity} bytes of program memory')
        self.size = size
        self.capacity = capacity


class Memory():
    ''' Flat byte memory with the call stack and the font table '''

    memory: bytearray
    stack: list[int]
    stack_depth: int

    def __init__(self, stack_depth: int = STACK_DEPTH):
        self.memory = bytearray(MEMORY_SIZE)
        self.stack = []
        self.stack_depth = stack_depth

        self.memory[FONT_BASE:FONT_BASE + len(FONT)] = FONT

    # - Helpers - #

    def check(self, address: int, width: int = 1):
        if address < 0 or address + width > MEMORY_SIZE:
            raise MemoryViolation(address)

    # - Access - #

    def read8(self, address: int) -> int:
        self.check(address)
        return self.memory[address]

    def write8(self, address: int, value: int):
        self.check(address)
        self.memory[address] = value & 0xFF

    def read16(self, address: int) -> int:
        self.check(address, 2)
        return (self.memory[address] << 8) | self.memory[address + 1]

    def write16(self, address: int, value: int):
        self.check(address, 2)
        self.memory[address] = (value >> 8) & 0xFF
        self.memory[address + 1] = value & 0xFF

    def read_block(self, address: int, size: int) -> bytes:
        self.check(address, size)
        return bytes(self.memory[address:address + size])

    def write_block(self, address: int, data: bytes):
        self.check(address, len(data))
        self.memory[address:address + len(data)] = data

    # - Stack - #

    @property
    def stack_size(self) -> int:
        return len(self.stack)

    def push_stack(self, value: int):
        if len(self.stack) >= self.stack_depth:
            raise StackOverflow(f'Call stack exceeds {self.stack_depth} entries')

        self.stack.append(value & 0xFFFF)

    def pop_stack(self) -> int:
        if not self.stack:
            raise StackUnderflow('Return with an empty call stack')

        return self.stack.pop()

    # - Program - #

    def load_rom(self, rom: bytes):
        if len(rom) > ROM_CAPACITY:
            raise RomTooLarge(len(rom), ROM_CAPACITY)

        lg.debug(f'Loading {len(rom)} ROM bytes at 0x{ROM_BASE:X}')
        self.memory[ROM_BASE:ROM_BASE + len(rom)] = rom
