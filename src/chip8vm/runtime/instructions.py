''' Instruction descriptors and the opcode decoder '''

from dataclasses import dataclass
from typing import ClassVar

import chip8vm.common.ops as ops


def x_value(value: int) -> int:
    return (value >> 8) & 0x0F


def y_value(value: int) -> int:
    return (value >> 4) & 0x0F


@dataclass(frozen=True)
class Instruction:
    OPCODE: ClassVar[int]
    FORMAT: ClassVar[str]

    @classmethod
    def from_opcode(cls, value: int) -> 'Instruction':
        raise NotImplementedError()

    def encode(self) -> int:
        raise NotImplementedError()

    def __str__(self) -> str:
        return self.FORMAT.format(**vars(self))


# - Operand shapes - #

@dataclass(frozen=True)
class Nullary(Instruction):
    @classmethod
    def from_opcode(cls, value: int):
        return cls()

    def encode(self):
        return self.OPCODE


@dataclass(frozen=True)
class Address(Instruction):
    addr: int

    @classmethod
    def from_opcode(cls, value: int):
        return cls(value & 0x0FFF)

    def encode(self):
        return self.OPCODE | (self.addr & 0x0FFF)


@dataclass(frozen=True)
class RegByte(Instruction):
    x: int
    byte: int

    @classmethod
    def from_opcode(cls, value: int):
        return cls(x_value(value), value & 0x00FF)

    def encode(self):
        return self.OPCODE | (self.x << 8) | (self.byte & 0xFF)


@dataclass(frozen=True)
class RegPair(Instruction):
    x: int
    y: int

    @classmethod
    def from_opcode(cls, value: int):
        return cls(x_value(value), y_value(value))

    def encode(self):
        return self.OPCODE | (self.x << 8) | (self.y << 4)


@dataclass(frozen=True)
class Reg(Instruction):
    x: int

    @classmethod
    def from_opcode(cls, value: int):
        return cls(x_value(value))

    def encode(self):
        return self.OPCODE | (self.x << 8)


# - Instructions - #

@dataclass(frozen=True)
class Cls(Nullary):
    OPCODE = ops.CLS
    FORMAT = 'CLS'


@dataclass(frozen=True)
class Ret(Nullary):
    OPCODE = ops.RET
    FORMAT = 'RET'


@dataclass(frozen=True)
class Jp(Address):
    OPCODE = ops.JP
    FORMAT = 'JP 0x{addr:03X}'


@dataclass(frozen=True)
class Call(Address):
    OPCODE = ops.CALL
    FORMAT = 'CALL 0x{addr:03X}'


@dataclass(frozen=True)
class SeByte(RegByte):
    OPCODE = ops.SE_BYTE
    FORMAT = 'SE V{x:X}, 0x{byte:02X}'


@dataclass(frozen=True)
class SneByte(RegByte):
    OPCODE = ops.SNE_BYTE
    FORMAT = 'SNE V{x:X}, 0x{byte:02X}'


@dataclass(frozen=True)
class LdByte(RegByte):
    OPCODE = ops.LD_BYTE
    FORMAT = 'LD V{x:X}, 0x{byte:02X}'


@dataclass(frozen=True)
class AddByte(RegByte):
    OPCODE = ops.ADD_BYTE
    FORMAT = 'ADD V{x:X}, 0x{byte:02X}'


@dataclass(frozen=True)
class LdI(Address):
    OPCODE = ops.LD_I
    FORMAT = 'LD I, 0x{addr:03X}'


@dataclass(frozen=True)
class JpV0(Address):
    OPCODE = ops.JP_V0
    FORMAT = 'JP V0, 0x{addr:03X}'


@dataclass(frozen=True)
class Rnd(RegByte):
    OPCODE = ops.RND
    FORMAT = 'RND V{x:X}, 0x{byte:02X}'


@dataclass(frozen=True)
class Drw(Instruction):
    x: int
    y: int
    n: int

    OPCODE = ops.DRW
    FORMAT = 'DRW V{x:X}, V{y:X}, {n}'

    @classmethod
    def from_opcode(cls, value: int):
        return cls(x_value(value), y_value(value), value & 0x000F)

    def encode(self):
        return self.OPCODE | (self.x << 8) | (self.y << 4) | (self.n & 0x0F)


@dataclass(frozen=True)
class SeReg(RegPair):
    OPCODE = ops.SE_REG
    FORMAT = 'SE V{x:X}, V{y:X}'


@dataclass(frozen=True)
class LdReg(RegPair):
    OPCODE = ops.LD_REG
    FORMAT = 'LD V{x:X}, V{y:X}'


@dataclass(frozen=True)
class Or(RegPair):
    OPCODE = ops.OR
    FORMAT = 'OR V{x:X}, V{y:X}'


@dataclass(frozen=True)
class And(RegPair):
    OPCODE = ops.AND
    FORMAT = 'AND V{x:X}, V{y:X}'


@dataclass(frozen=True)
class Xor(RegPair):
    OPCODE = ops.XOR
    FORMAT = 'XOR V{x:X}, V{y:X}'


@dataclass(frozen=True)
class AddReg(RegPair):
    OPCODE = ops.ADD_REG
    FORMAT = 'ADD V{x:X}, V{y:X}'


@dataclass(frozen=True)
class Sub(RegPair):
    OPCODE = ops.SUB
    FORMAT = 'SUB V{x:X}, V{y:X}'


@dataclass(frozen=True)
class Shr(RegPair):
    OPCODE = ops.SHR
    FORMAT = 'SHR V{x:X}, V{y:X}'


@dataclass(frozen=True)
class Subn(RegPair):
    OPCODE = ops.SUBN
    FORMAT = 'SUBN V{x:X}, V{y:X}'


@dataclass(frozen=True)
class Shl(RegPair):
    OPCODE = ops.SHL
    FORMAT = 'SHL V{x:X}, V{y:X}'


@dataclass(frozen=True)
class SneReg(RegPair):
    OPCODE = ops.SNE_REG
    FORMAT = 'SNE V{x:X}, V{y:X}'


@dataclass(frozen=True)
class Skp(Reg):
    OPCODE = ops.SKP
    FORMAT = 'SKP V{x:X}'


@dataclass(frozen=True)
class Sknp(Reg):
    OPCODE = ops.SKNP
    FORMAT = 'SKNP V{x:X}'


@dataclass(frozen=True)
class LdVxDt(Reg):
    OPCODE = ops.LD_VX_DT
    FORMAT = 'LD V{x:X}, DT'


@dataclass(frozen=True)
class LdVxK(Reg):
    OPCODE = ops.LD_VX_K
    FORMAT = 'LD V{x:X}, K'


@dataclass(frozen=True)
class LdDtVx(Reg):
    OPCODE = ops.LD_DT_VX
    FORMAT = 'LD DT, V{x:X}'


@dataclass(frozen=True)
class LdStVx(Reg):
    OPCODE = ops.LD_ST_VX
    FORMAT = 'LD ST, V{x:X}'


@dataclass(frozen=True)
class AddI(Reg):
    OPCODE = ops.ADD_I
    FORMAT = 'ADD I, V{x:X}'


@dataclass(frozen=True)
class LdF(Reg):
    OPCODE = ops.LD_F
    FORMAT = 'LD F, V{x:X}'


@dataclass(frozen=True)
class LdB(Reg):
    OPCODE = ops.LD_B
    FORMAT = 'LD B, V{x:X}'


@dataclass(frozen=True)
class LdIVx(Reg):
    OPCODE = ops.LD_I_VX
    FORMAT = 'LD [I], V{x:X}'


@dataclass(frozen=True)
class LdVxI(Reg):
    OPCODE = ops.LD_VX_I
    FORMAT = 'LD V{x:X}, [I]'


@dataclass(frozen=True)
class Invalid(Instruction):
    value: int

    FORMAT = 'INVALID 0x{value:04X}'

    @classmethod
    def from_opcode(cls, value: int):
        return cls(value)

    def encode(self):
        return self.value


# - Decoding - #

def by_opcode(*classes: type[Instruction]) -> dict[int, type[Instruction]]:
    return {c.OPCODE: c for c in classes}


EXACT = by_opcode(Cls, Ret)

BY_NIBBLE = by_opcode(
    Jp, Call, SeByte, SneByte, LdByte, AddByte, LdI, JpV0, Rnd, Drw
)

BY_PAIR = by_opcode(
    SeReg, LdReg, Or, And, Xor, AddReg, Sub, Shr, Subn, Shl, SneReg
)

BY_SUFFIX = by_opcode(
    Skp, Sknp, LdVxDt, LdVxK, LdDtVx, LdStVx, AddI, LdF, LdB, LdIVx, LdVxI
)

INSTRUCTIONS: tuple[type[Instruction], ...] = (
    *EXACT.values(),
    *BY_NIBBLE.values(),
    *BY_PAIR.values(),
    *BY_SUFFIX.values(),
    Invalid
)


def decode(value: int) -> Instruction:
    if value in EXACT:
        return EXACT[value]()

    for mask, table in (
        (ops.NIBBLE_MASK, BY_NIBBLE),
        (ops.PAIR_MASK, BY_PAIR),
        (ops.SUFFIX_MASK, BY_SUFFIX)
    ):
        instruction = table.get(value & mask)

        if instruction is not None:
            return instruction.from_opcode(value)

    return Invalid(value)
