import logging as lg
import random

import chip8vm.runtime.instructions as ins
from chip8vm.common.settings import Settings
from chip8vm.runtime.memory import Memory, VMError
from chip8vm.runtime.display import Framebuffer
from chip8vm.runtime.keypad import Keypad

from chip8vm.common.hwconf import (
    ROM_BASE, REGISTERS, FLAG_REGISTER, INSTRUCTION_SIZE, FONT_BASE, GLYPH_SIZE
)


class InvalidInstruction(VMError):
    def __init__(self, opcode: int, address: int):
        super().__init__(f'Invalid instruction 0x{opcode:04X} at 0x{address:03X}')
        self.opcode = opcode
        self.address = address


class CPU():
    ''' Fetch-decode-execute engine

    VF (register 15) is an ordinary register that arithmetic, shift and draw
    instructions also use as their flag output. The flag is written after the
    result, so an instruction targeting VF leaves the flag there.
    '''

    pc: int  # Program counter
    i: int  # Index register
    v: list[int]  # V0..VF
    delay_timer: int
    sound_timer: int
    waiting: int | None  # Register awaiting a key press

    def __init__(
        self,
        memory: Memory,
        display: Framebuffer,
        keypad: Keypad,
        rng: random.Random | None = None,
        settings: Settings | None = None
    ):
        self.memory = memory    # Ref. to memory
        self.display = display  # Ref. to display
        self.keypad = keypad    # Ref. to keypad, owned by the host
        self.rng = rng if rng is not None else random.Random()
        self.settings = settings if settings is not None else Settings()

        self.pc = ROM_BASE      # Execution starts from the beginning of the program
        self.i = 0
        self.v = [0] * REGISTERS

        self.delay_timer = 0
        self.sound_timer = 0
        self.waiting = None

    # - Helpers - #

    def debug_dump(self):
        state = [f'{k}:{v:X}' for k, v in {
            'PC': self.pc,
            'I': self.i,
            'DT': self.delay_timer,
            'ST': self.sound_timer
        }.items()]

        state.extend([f'V{r:X}:{self.v[r]:X}' for r in range(REGISTERS)])

        lg.debug(' '.join(state))

    @property
    def blocked(self) -> bool:
        return self.waiting is not None

    @property
    def sound_active(self) -> bool:
        return self.sound_timer > 0

    def skip(self, condition: bool):
        if condition:
            self.pc = (self.pc + INSTRUCTION_SIZE) & 0xFFFF

    def set_with_flag(self, x: int, value: int, flag: int):
        self.v[x] = value & 0xFF
        self.v[FLAG_REGISTER] = flag

    # - Flow - #

    def cls(self, _: ins.Cls):
        self.display.clear()

    def ret(self, _: ins.Ret):
        self.pc = self.memory.pop_stack()

    def jp(self, op: ins.Jp):
        self.pc = op.addr

    def call(self, op: ins.Call):
        self.memory.push_stack(self.pc)
        self.pc = op.addr

    def jp_v0(self, op: ins.JpV0):
        self.pc = (self.v[0] + op.addr) & 0xFFFF

    def se_byte(self, op: ins.SeByte):
        self.skip(self.v[op.x] == op.byte)

    def sne_byte(self, op: ins.SneByte):
        self.skip(self.v[op.x] != op.byte)

    def se_reg(self, op: ins.SeReg):
        self.skip(self.v[op.x] == self.v[op.y])

    def sne_reg(self, op: ins.SneReg):
        self.skip(self.v[op.x] != self.v[op.y])

    # - Registers - #

    def ld_byte(self, op: ins.LdByte):
        self.v[op.x] = op.byte

    def add_byte(self, op: ins.AddByte):
        self.v[op.x] = (self.v[op.x] + op.byte) & 0xFF

    def ld_reg(self, op: ins.LdReg):
        self.v[op.x] = self.v[op.y]

    def bor(self, op: ins.Or):
        self.v[op.x] |= self.v[op.y]

    def band(self, op: ins.And):
        self.v[op.x] &= self.v[op.y]

    def xor(self, op: ins.Xor):
        self.v[op.x] ^= self.v[op.y]

    # - Arithmetic - #

    def add_reg(self, op: ins.AddReg):
        a, b = self.v[op.x], self.v[op.y]
        self.set_with_flag(op.x, a + b, 1 if a + b > 0xFF else 0)

    def sub(self, op: ins.Sub):
        a, b = self.v[op.x], self.v[op.y]
        self.set_with_flag(op.x, a - b, 1 if a > b else 0)

    def subn(self, op: ins.Subn):
        a, b = self.v[op.x], self.v[op.y]
        self.set_with_flag(op.x, b - a, 1 if b > a else 0)

    def shr(self, op: ins.Shr):
        a = self.v[op.x]
        self.set_with_flag(op.x, a >> 1, a & 0x01)

    def shl(self, op: ins.Shl):
        a = self.v[op.x]
        flag = a & 0x80

        if self.settings.normalize_shift_flag:
            flag >>= 7

        self.set_with_flag(op.x, a << 1, flag)

    def rnd(self, op: ins.Rnd):
        self.v[op.x] = self.rng.randint(0, 0xFF) & op.byte

    # - Memory - #

    def ld_i(self, op: ins.LdI):
        self.i = op.addr

    def add_i(self, op: ins.AddI):
        self.i = (self.i + self.v[op.x]) & 0xFFFF

    def ld_f(self, op: ins.LdF):
        self.i = FONT_BASE + (self.v[op.x] & 0x0F) * GLYPH_SIZE

    def ld_b(self, op: ins.LdB):
        value = self.v[op.x]
        self.memory.write_block(self.i, bytes([value // 100, value // 10 % 10, value % 10]))

    def ld_i_vx(self, op: ins.LdIVx):
        self.memory.write_block(self.i, bytes(self.v[:op.x + 1]))

        if self.settings.load_store_increments_index:
            self.i = (self.i + op.x + 1) & 0xFFFF

    def ld_vx_i(self, op: ins.LdVxI):
        self.v[:op.x + 1] = self.memory.read_block(self.i, op.x + 1)

        if self.settings.load_store_increments_index:
            self.i = (self.i + op.x + 1) & 0xFFFF

    # - Display - #

    def drw(self, op: ins.Drw):
        collision = self.display.draw(self.i, op.n, self.v[op.x], self.v[op.y], self.memory)
        self.v[FLAG_REGISTER] = 1 if collision else 0

    # - Keypad - #

    def skp(self, op: ins.Skp):
        self.skip(self.keypad.key_pressed(self.v[op.x] & 0x0F))

    def sknp(self, op: ins.Sknp):
        self.skip(not self.keypad.key_pressed(self.v[op.x] & 0x0F))

    def ld_vx_k(self, op: ins.LdVxK):
        lg.debug(f'Waiting for a key into V{op.x:X}')
        self.waiting = op.x

    # - Timers - #

    def ld_vx_dt(self, op: ins.LdVxDt):
        self.v[op.x] = self.delay_timer

    def ld_dt_vx(self, op: ins.LdDtVx):
        self.delay_timer = self.v[op.x]

    def ld_st_vx(self, op: ins.LdStVx):
        self.sound_timer = self.v[op.x]

    def invalid(self, op: ins.Invalid):
        raise InvalidInstruction(op.value, (self.pc - INSTRUCTION_SIZE) & 0xFFFF)

    HANDLERS = {
        ins.Cls: cls,
        ins.Ret: ret,
        ins.Jp: jp,
        ins.Call: call,
        ins.SeByte: se_byte,
        ins.SneByte: sne_byte,
        ins.LdByte: ld_byte,
        ins.AddByte: add_byte,
        ins.LdI: ld_i,
        ins.JpV0: jp_v0,
        ins.Rnd: rnd,
        ins.Drw: drw,

        ins.SeReg: se_reg,
        ins.LdReg: ld_reg,
        ins.Or: bor,
        ins.And: band,
        ins.Xor: xor,
        ins.AddReg: add_reg,
        ins.Sub: sub,
        ins.Shr: shr,
        ins.Subn: subn,
        ins.Shl: shl,
        ins.SneReg: sne_reg,

        ins.Skp: skp,
        ins.Sknp: sknp,
        ins.LdVxDt: ld_vx_dt,
        ins.LdVxK: ld_vx_k,
        ins.LdDtVx: ld_dt_vx,
        ins.LdStVx: ld_st_vx,
        ins.AddI: add_i,
        ins.LdF: ld_f,
        ins.LdB: ld_b,
        ins.LdIVx: ld_i_vx,
        ins.LdVxI: ld_vx_i,

        ins.Invalid: invalid
    }

    # -- Implementation -- #

    def poll_keypad(self):
        key = self.keypad.first_pressed()

        if key is None or self.waiting is None:
            return

        lg.debug(f'Key {key:X} -> V{self.waiting:X}')
        self.v[self.waiting] = key
        self.waiting = None

    def tick_timers(self):
        if self.delay_timer > 0:
            self.delay_timer -= 1

        if self.sound_timer > 0:
            self.sound_timer -= 1

    def step(self) -> ins.Instruction | None:
        if self.waiting is not None:
            self.poll_keypad()
            return None

        address = self.pc
        value = self.memory.read16(address)
        self.pc = (address + INSTRUCTION_SIZE) & 0xFFFF

        instruction = ins.decode(value)
        lg.debug(f'{address:03X}: {value:04X} {instruction}')

        handler = self.HANDLERS[type(instruction)]
        handler(self, instruction)
        return instruction
