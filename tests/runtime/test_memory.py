import pytest

from chip8vm.common.hwconf import ROM_BASE, ROM_CAPACITY, MEMORY_SIZE, GLYPH_SIZE
from chip8vm.runtime.memory import (
    Memory, FONT, MemoryViolation, StackOverflow, StackUnderflow, RomTooLarge
)


def test_font_table():
    memory = Memory()

    assert memory.read_block(0, len(FONT)) == FONT
    assert memory.read_block(0xA * GLYPH_SIZE, GLYPH_SIZE) == bytes([0xF0, 0x90, 0xF0, 0x90, 0x90])
    assert memory.read8(len(FONT)) == 0


def test_big_endian_words():
    memory = Memory()
    memory.write16(0x300, 0x12AB)

    assert memory.read8(0x300) == 0x12
    assert memory.read8(0x301) == 0xAB
    assert memory.read16(0x300) == 0x12AB


def test_write_masks_values():
    memory = Memory()
    memory.write8(0x300, 0x1FF)
    memory.write16(0x302, 0x12345)

    assert memory.read8(0x300) == 0xFF
    assert memory.read16(0x302) == 0x2345


@pytest.mark.parametrize('address', [-1, MEMORY_SIZE, 0xFFFF])
def test_byte_access_out_of_range(address):
    memory = Memory()

    with pytest.raises(MemoryViolation) as e:
        memory.read8(address)

    assert e.value.address == address

    with pytest.raises(MemoryViolation):
        memory.write8(address, 0)


def test_word_access_straddling_the_end():
    memory = Memory()

    assert memory.read16(MEMORY_SIZE - 2) == 0

    with pytest.raises(MemoryViolation):
        memory.read16(MEMORY_SIZE - 1)

    with pytest.raises(MemoryViolation):
        memory.write16(MEMORY_SIZE - 1, 0xFFFF)

    assert memory.read8(MEMORY_SIZE - 1) == 0


def test_stack_is_lifo():
    memory = Memory()
    memory.push_stack(0x202)
    memory.push_stack(0x304)

    assert memory.stack_size == 2
    assert memory.pop_stack() == 0x304
    assert memory.pop_stack() == 0x202
    assert memory.stack_size == 0


def test_stack_bounds():
    memory = Memory(stack_depth=2)
    memory.push_stack(1)
    memory.push_stack(2)

    with pytest.raises(StackOverflow):
        memory.push_stack(3)

    memory.pop_stack()
    memory.pop_stack()

    with pytest.raises(StackUnderflow):
        memory.pop_stack()


def test_load_rom():
    memory = Memory()
    memory.load_rom(bytes([0x60, 0x0A, 0x00, 0xE0]))

    assert memory.read16(ROM_BASE) == 0x600A
    assert memory.read16(ROM_BASE + 2) == 0x00E0


def test_load_rom_fills_program_memory():
    memory = Memory()
    memory.load_rom(bytes([0xAA]) * ROM_CAPACITY)

    assert memory.read8(MEMORY_SIZE - 1) == 0xAA
    assert memory.read_block(0, len(FONT)) == FONT


def test_load_rom_too_large():
    memory = Memory()

    with pytest.raises(RomTooLarge) as e:
        memory.load_rom(bytes([0xAA]) * (ROM_CAPACITY + 1))

    assert e.value.size == ROM_CAPACITY + 1
    assert memory.read8(ROM_BASE) == 0
