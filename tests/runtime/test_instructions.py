import pytest

import chip8vm.runtime.instructions as ins


@pytest.mark.parametrize('opcode, expected', [
    (0x00E0, ins.Cls()),
    (0x00EE, ins.Ret()),
    (0x1234, ins.Jp(0x234)),
    (0x2ABC, ins.Call(0xABC)),
    (0x3A12, ins.SeByte(0xA, 0x12)),
    (0x4B34, ins.SneByte(0xB, 0x34)),
    (0x5120, ins.SeReg(1, 2)),
    (0x600A, ins.LdByte(0, 0x0A)),
    (0x7FFF, ins.AddByte(0xF, 0xFF)),
    (0x8120, ins.LdReg(1, 2)),
    (0x8121, ins.Or(1, 2)),
    (0x8122, ins.And(1, 2)),
    (0x8123, ins.Xor(1, 2)),
    (0x8124, ins.AddReg(1, 2)),
    (0x8125, ins.Sub(1, 2)),
    (0x8126, ins.Shr(1, 2)),
    (0x8127, ins.Subn(1, 2)),
    (0x812E, ins.Shl(1, 2)),
    (0x9120, ins.SneReg(1, 2)),
    (0xA300, ins.LdI(0x300)),
    (0xB200, ins.JpV0(0x200)),
    (0xC30F, ins.Rnd(3, 0x0F)),
    (0xD125, ins.Drw(1, 2, 5)),
    (0xE59E, ins.Skp(5)),
    (0xE5A1, ins.Sknp(5)),
    (0xF107, ins.LdVxDt(1)),
    (0xF10A, ins.LdVxK(1)),
    (0xF115, ins.LdDtVx(1)),
    (0xF118, ins.LdStVx(1)),
    (0xF11E, ins.AddI(1)),
    (0xF129, ins.LdF(1)),
    (0xF133, ins.LdB(1)),
    (0xF155, ins.LdIVx(1)),
    (0xF165, ins.LdVxI(1)),
])
def test_decode(opcode, expected):
    assert ins.decode(opcode) == expected


@pytest.mark.parametrize('opcode', [
    0x0000, 0x0123, 0x00E1, 0x5121, 0x8008, 0x800F, 0x9001, 0xE000, 0xE19F, 0xF000, 0xF0FF, 0xFFFF
])
def test_decode_invalid(opcode):
    assert ins.decode(opcode) == ins.Invalid(opcode)


def test_decode_every_opcode():
    for opcode in range(0x10000):
        instruction = ins.decode(opcode)

        assert type(instruction) in ins.INSTRUCTIONS
        assert instruction.encode() == opcode
        assert ins.decode(opcode) == instruction


def test_exact_matches_take_precedence():
    # 00E0 and 00EE share the SYS nibble with otherwise invalid words
    assert ins.decode(0x00E0) == ins.Cls()
    assert ins.decode(0x00E2) == ins.Invalid(0x00E2)


def test_shift_keeps_second_operand():
    assert ins.decode(0x8E3E) == ins.Shl(0xE, 3)


@pytest.mark.parametrize('opcode, text', [
    (0x00E0, 'CLS'),
    (0x1234, 'JP 0x234'),
    (0xB300, 'JP V0, 0x300'),
    (0x3A12, 'SE VA, 0x12'),
    (0x8124, 'ADD V1, V2'),
    (0xD125, 'DRW V1, V2, 5'),
    (0xF155, 'LD [I], V1'),
    (0xF165, 'LD V1, [I]'),
    (0xF20A, 'LD V2, K'),
    (0x0123, 'INVALID 0x0123'),
])
def test_mnemonics(opcode, text):
    assert str(ins.decode(opcode)) == text
