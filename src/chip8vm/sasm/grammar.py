# type: ignore
''' CHIP-8 assembly grammar '''

import pyparsing as pp

import chip8vm.runtime.instructions as ins
from chip8vm.sasm.fpp import FPP


def to_int(literal: str) -> int:
    lowered = literal.lower()

    if lowered.startswith('0x'):
        return int(lowered[2:], 16)

    if lowered.startswith('0b'):
        return int(lowered[2:], 2)

    return int(lowered, 10)


K = pp.CaselessKeyword
comma = pp.Suppress(',')

id = pp.Word(pp.alphas + '_', pp.alphanums + '_')
comment = pp.Regex(r'(;|//)[^\n]*')

number = pp.Regex(r'0[xX][0-9a-fA-F]+|0[bB][01]+|[0-9]+')
number.set_parse_action(lambda r: to_int(r[0]))

reg = pp.Regex(r'[vV][0-9a-fA-F]\b').set_parse_action(lambda r: int(r[0][1], 16))

# Label reference or absolute address
address = number | id

label = (id + pp.Suppress(':')).set_parse_action(lambda r: (FPP.on_label, r[0]))


def fixed(*names: str):
    ''' Operand spelled out literally, not part of the encoding '''
    return pp.Suppress(pp.And([K(name) if name[0].isalpha() else pp.Literal(name) for name in names]))


dt = fixed('DT')
st = fixed('ST')
key = fixed('K')
index = fixed('I')
index_ref = fixed('[', 'I', ']')


def g_cmd(mnemonic, instruction, *operands):
    expr = pp.Suppress(K(mnemonic))

    for position, operand in enumerate(operands):
        if position:
            expr = expr + comma

        expr = expr + operand

    return expr.set_parse_action(lambda r: (FPP.issue_instruction, (instruction, list(r))))


def g_shift(mnemonic, instruction):
    ''' SHR/SHL Vx [, Vy], Vy is carried in the encoding only '''
    expr = pp.Suppress(K(mnemonic)) + reg + pp.Opt(comma + reg)

    return expr.set_parse_action(
        lambda r: (FPP.issue_instruction, (instruction, list(r) if len(r) == 2 else [r[0], 0]))
    )


def g_data(mnemonic, action, item):
    expr = pp.Suppress(K(mnemonic)) + item + pp.ZeroOrMore(comma + item)
    return expr.set_parse_action(lambda r: (action, list(r)))


# Flow
cls_cmd = g_cmd('CLS', ins.Cls)
ret_cmd = g_cmd('RET', ins.Ret)
jp_v0_cmd = g_cmd('JP', ins.JpV0, fixed('V0'), address)
jp_cmd = g_cmd('JP', ins.Jp, address)
call_cmd = g_cmd('CALL', ins.Call, address)
se_reg_cmd = g_cmd('SE', ins.SeReg, reg, reg)
se_byte_cmd = g_cmd('SE', ins.SeByte, reg, number)
sne_reg_cmd = g_cmd('SNE', ins.SneReg, reg, reg)
sne_byte_cmd = g_cmd('SNE', ins.SneByte, reg, number)
skp_cmd = g_cmd('SKP', ins.Skp, reg)
sknp_cmd = g_cmd('SKNP', ins.Sknp, reg)

# Loads
ld_reg_cmd = g_cmd('LD', ins.LdReg, reg, reg)
ld_vx_dt_cmd = g_cmd('LD', ins.LdVxDt, reg, dt)
ld_vx_k_cmd = g_cmd('LD', ins.LdVxK, reg, key)
ld_vx_i_cmd = g_cmd('LD', ins.LdVxI, reg, index_ref)
ld_byte_cmd = g_cmd('LD', ins.LdByte, reg, number)
ld_i_cmd = g_cmd('LD', ins.LdI, index, address)
ld_dt_vx_cmd = g_cmd('LD', ins.LdDtVx, dt, reg)
ld_st_vx_cmd = g_cmd('LD', ins.LdStVx, st, reg)
ld_f_cmd = g_cmd('LD', ins.LdF, fixed('F'), reg)
ld_b_cmd = g_cmd('LD', ins.LdB, fixed('B'), reg)
ld_i_vx_cmd = g_cmd('LD', ins.LdIVx, index_ref, reg)

# Arithmetic
add_reg_cmd = g_cmd('ADD', ins.AddReg, reg, reg)
add_i_cmd = g_cmd('ADD', ins.AddI, index, reg)
add_byte_cmd = g_cmd('ADD', ins.AddByte, reg, number)
or_cmd = g_cmd('OR', ins.Or, reg, reg)
and_cmd = g_cmd('AND', ins.And, reg, reg)
xor_cmd = g_cmd('XOR', ins.Xor, reg, reg)
sub_cmd = g_cmd('SUB', ins.Sub, reg, reg)
subn_cmd = g_cmd('SUBN', ins.Subn, reg, reg)
shr_cmd = g_shift('SHR', ins.Shr)
shl_cmd = g_shift('SHL', ins.Shl)
rnd_cmd = g_cmd('RND', ins.Rnd, reg, number)

# Display
drw_cmd = g_cmd('DRW', ins.Drw, reg, reg, number)

# Data
db_cmd = g_data('DB', FPP.issue_bytes, number)
dw_cmd = g_data('DW', FPP.issue_words, address)

asm_cmd = cls_cmd \
    | ret_cmd \
    | jp_v0_cmd \
    | jp_cmd \
    | call_cmd \
    | se_reg_cmd \
    | se_byte_cmd \
    | sne_reg_cmd \
    | sne_byte_cmd \
    | skp_cmd \
    | sknp_cmd \
    | ld_reg_cmd \
    | ld_vx_dt_cmd \
    | ld_vx_k_cmd \
    | ld_vx_i_cmd \
    | ld_byte_cmd \
    | ld_i_cmd \
    | ld_dt_vx_cmd \
    | ld_st_vx_cmd \
    | ld_f_cmd \
    | ld_b_cmd \
    | ld_i_vx_cmd \
    | add_reg_cmd \
    | add_i_cmd \
    | add_byte_cmd \
    | or_cmd \
    | and_cmd \
    | xor_cmd \
    | sub_cmd \
    | subn_cmd \
    | shr_cmd \
    | shl_cmd \
    | rnd_cmd \
    | drw_cmd \
    | db_cmd \
    | dw_cmd

program = pp.ZeroOrMore(label | asm_cmd)
program.ignore(comment)
