# Exact opcodes
CLS = 0x00E0       # clear display
RET = 0x00EE       # PC <- pop

# Keyed by the high nibble
NIBBLE_MASK = 0xF000

JP = 0x1000        # nnn -> PC
CALL = 0x2000      # push PC; nnn -> PC
SE_BYTE = 0x3000   # if Vx .eq kk skip
SNE_BYTE = 0x4000  # if Vx .ne kk skip
LD_BYTE = 0x6000   # kk -> Vx
ADD_BYTE = 0x7000  # Vx + kk -> Vx
LD_I = 0xA000      # nnn -> I
JP_V0 = 0xB000     # V0 + nnn -> PC
RND = 0xC000       # random & kk -> Vx
DRW = 0xD000       # sprite M[I..I+n] at (Vx, Vy); collision -> VF

# Register pairs, keyed by the high and the low nibble
PAIR_MASK = 0xF00F

SE_REG = 0x5000    # if Vx .eq Vy skip
LD_REG = 0x8000    # Vy -> Vx
OR = 0x8001        # Vx | Vy -> Vx
AND = 0x8002       # Vx & Vy -> Vx
XOR = 0x8003       # Vx ^ Vy -> Vx
ADD_REG = 0x8004   # Vx + Vy -> Vx; carry -> VF
SUB = 0x8005       # Vx - Vy -> Vx; no borrow -> VF
SHR = 0x8006       # Vx >> 1 -> Vx; lsb -> VF
SUBN = 0x8007      # Vy - Vx -> Vx; no borrow -> VF
SHL = 0x800E       # Vx << 1 -> Vx; msb -> VF
SNE_REG = 0x9000   # if Vx .ne Vy skip

# Single register, keyed by the high nibble and the low byte
SUFFIX_MASK = 0xF0FF

SKP = 0xE09E       # if key[Vx] pressed skip
SKNP = 0xE0A1      # if key[Vx] released skip
LD_VX_DT = 0xF007  # DT -> Vx
LD_VX_K = 0xF00A   # block until key; key -> Vx
LD_DT_VX = 0xF015  # Vx -> DT
LD_ST_VX = 0xF018  # Vx -> ST
ADD_I = 0xF01E     # I + Vx -> I
LD_F = 0xF029      # glyph address of Vx -> I
LD_B = 0xF033      # BCD of Vx -> M[I..I+2]
LD_I_VX = 0xF055   # V0..Vx -> M[I..I+x]
LD_VX_I = 0xF065   # M[I..I+x] -> V0..Vx
