from typing import TypeAlias

from chip8vm.common.hwconf import (
    DISPLAY_WIDTH, DISPLAY_HEIGHT, SPRITE_WIDTH, PIXEL_ON, PIXEL_OFF
)
from chip8vm.runtime.memory import Memory


Color: TypeAlias = tuple[int, int, int, int]


class Framebuffer():
    ''' Monochrome 64x32 display, row-major, one 0/1 byte per pixel

    Sprite origins always wrap around the display. Sprite rows and columns
    running off the right or bottom edge are clipped, unless clip_sprites is
    false, in which case they wrap to the opposite edge as well.
    '''

    display: list[bytearray]
    clip_sprites: bool

    def __init__(self, clip_sprites: bool = True):
        self.display = [bytearray(DISPLAY_WIDTH) for _ in range(DISPLAY_HEIGHT)]
        self.clip_sprites = clip_sprites

    def pixel(self, x: int, y: int) -> int:
        return self.display[y % DISPLAY_HEIGHT][x % DISPLAY_WIDTH]

    def rows(self) -> list[bytes]:
        return [bytes(row) for row in self.display]

    def fill(self, value: int):
        for row in self.display:
            row[:] = bytes([value & 0x01]) * DISPLAY_WIDTH

    def clear(self):
        self.fill(0)

    def draw(self, index: int, num_bytes: int, x: int, y: int, memory: Memory) -> bool:
        overwrote_pixel = False
        sprite = memory.read_block(index, num_bytes)

        x_coord = x % DISPLAY_WIDTH
        y_coord = y % DISPLAY_HEIGHT

        for row, bits in enumerate(sprite):
            if self.clip_sprites and y_coord + row >= DISPLAY_HEIGHT:
                break

            cy = (y_coord + row) % DISPLAY_HEIGHT

            for col in range(SPRITE_WIDTH):
                if self.clip_sprites and x_coord + col >= DISPLAY_WIDTH:
                    break

                if not bits & (0x80 >> col):
                    continue

                cx = (x_coord + col) % DISPLAY_WIDTH

                if self.display[cy][cx]:
                    self.display[cy][cx] = 0
                    overwrote_pixel = True
                else:
                    self.display[cy][cx] = 1

        return overwrote_pixel

    # - Export - #

    def to_rgba(self, on: Color = PIXEL_ON, off: Color = PIXEL_OFF) -> bytes:
        data = bytearray()

        for row in self.display:
            for pixel in row:
                data.extend(on if pixel else off)

        return bytes(data)

    def to_text(self, on: str = '#', off: str = '.') -> str:
        return '\n'.join(
            ''.join(on if pixel else off for pixel in row)
            for row in self.display
        )
