''' First-pass processor '''

import logging as lg
import struct
from dataclasses import fields
from typing import Any, TypeAlias

from chip8vm.common.hwconf import ROM_BASE, INSTRUCTION_SIZE
import chip8vm.runtime.instructions as ins


# Upper bound of every operand field an instruction may carry
OPERAND_LIMITS = {
    'x': 0x0F,
    'y': 0x0F,
    'n': 0x0F,
    'byte': 0xFF,
    'addr': 0x0FFF
}


class AsmError(Exception):
    pass


Operand: TypeAlias = int | str
Command: TypeAlias = tuple[str, Any]


class FPP:
    cmd_list: list[Command]
    offset: int
    label_dict: dict[str, int]

    def __init__(self):
        self.cmd_list = []
        self.offset = ROM_BASE
        self.label_dict = {}

    # Handlers

    def on_label(self, name: str):
        if name in self.label_dict:
            raise AsmError(f'Duplicate label {name}')

        self.label_dict[name] = self.offset
        lg.debug(f'Label {name} @ 0x{self.offset:X}')

    def issue_instruction(self, payload: tuple[type[ins.Instruction], list[Operand]]):
        self.cmd_list.append(('instr', payload))
        self.offset += INSTRUCTION_SIZE

    def issue_bytes(self, values: list[int]):
        for value in values:
            if not 0 <= value <= 0xFF:
                raise AsmError(f'Byte {value} out of range')

        self.cmd_list.append(('bytes', bytes(values)))
        self.offset += len(values)

    def issue_words(self, values: list[Operand]):
        self.cmd_list.append(('words', values))
        self.offset += 2 * len(values)

    # Second pass

    def resolve(self, operand: Operand) -> int:
        if isinstance(operand, int):
            return operand

        if operand not in self.label_dict:
            raise AsmError(f'Unknown label {operand}')

        return self.label_dict[operand]

    def build(self, instruction: type[ins.Instruction], operands: list[Operand]) -> ins.Instruction:
        values = [self.resolve(operand) for operand in operands]

        for field, value in zip(fields(instruction), values):
            limit = OPERAND_LIMITS[field.name]

            if not 0 <= value <= limit:
                raise AsmError(f'{instruction.__name__} operand {field.name}={value:#x} out of range')

        return instruction(*values)

    def emit(self) -> bytes:
        bytestr = bytearray()

        for (t, d) in self.cmd_list:
            if t == 'bytes':
                bytestr += d

            if t == 'words':
                for word in d:
                    value = self.resolve(word)

                    if not 0 <= value <= 0xFFFF:
                        raise AsmError(f'Word {value} out of range')

                    bytestr += struct.pack('>H', value)

            if t == 'instr':
                (instruction, operands) = d
                built = self.build(instruction, operands)
                lg.debug(f'Emitting {built}')
                bytestr += struct.pack('>H', built.encode())

        return bytes(bytestr)
