import sys
import random
from pathlib import Path
import logging as lg
import traceback

import click

from chip8vm.common.settings import Settings
from chip8vm.runtime.memory import Memory, VMError
from chip8vm.runtime.display import Framebuffer
from chip8vm.runtime.keypad import Keypad
import chip8vm.runtime.cpu as cpu


EXIT_OK = 0
EXIT_INVALID = 2
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100

# Steps between two timer ticks, roughly 600 instructions per 60 Hz frame
TICKS_EVERY = 10


def boot(
    rom: bytes,
    settings: Settings | None = None,
    rng: random.Random | None = None,
    keypad: Keypad | None = None
) -> cpu.CPU:
    if settings is None:
        settings = Settings()

    memory = Memory(settings.stack_depth)
    memory.load_rom(rom)

    display = Framebuffer(settings.clip_sprites)

    if keypad is None:
        keypad = Keypad()

    return cpu.CPU(memory, display, keypad, rng, settings)


def execute(proc: cpu.CPU, cycles: int, ticks_every: int = TICKS_EVERY) -> int:
    for step in range(cycles):
        proc.step()

        if ticks_every and (step + 1) % ticks_every == 0:
            proc.tick_timers()

        if proc.blocked:
            lg.info(f'Waiting for a key after {step + 1} steps')
            return step + 1

    return cycles


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-n', '--cycles', type=int, default=1000, help='Number of instructions to execute')
@click.option('--seed', type=int, help='Seed for the random number instruction')
@click.option('--wrap-sprites', is_flag=True, help='Wrap sprites around the display edges')
@click.option('--raw-shift-flag', is_flag=True, help='Store the raw 0x80 bit in VF on SHL')
@click.option('--increment-index', is_flag=True, help='Advance I on register store/load')
@click.argument('rom_filename', type=Path)
def run(
    verbose: bool,
    cycles: int,
    seed: int | None,
    wrap_sprites: bool,
    raw_shift_flag: bool,
    increment_index: bool,
    rom_filename: Path
):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('CHIP-8')

    settings = Settings().update(
        clip_sprites=not wrap_sprites,
        normalize_shift_flag=not raw_shift_flag,
        load_store_increments_index=increment_index
    )

    rng = random.Random(seed) if seed is not None else None

    try:
        rom = rom_filename.read_bytes()
        proc = boot(rom, settings, rng)
        executed = execute(proc, cycles)
        lg.info(f'Executed {executed} steps')

        if verbose:
            proc.debug_dump()

        click.echo(proc.display.to_text())
        sys.exit(EXIT_OK)

    except cpu.InvalidInstruction as e:
        lg.info(f'Execution halted: {e}')
        sys.exit(EXIT_INVALID)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except VMError as e:
        lg.info(f'Execution halted on machine error: {e}')
        sys.exit(EXIT_EXEC_ERROR)

    except OSError as e:
        lg.info(f'Unable to read {rom_filename}: {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
