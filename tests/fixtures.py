# type: ignore
import pytest

from chip8vm.runtime.memory import Memory
from chip8vm.runtime.display import Framebuffer

SPRITE_BASE = 0x300


@pytest.fixture
def memory():
    yield Memory()


@pytest.fixture
def with_sprite(memory):
    # 8x3 sprite: full row, edges, full row
    memory.write_block(SPRITE_BASE, bytes([0xFF, 0x81, 0xFF]))
    yield memory


@pytest.fixture
def display():
    yield Framebuffer()


@pytest.fixture
def wrapping_display():
    yield Framebuffer(clip_sprites=False)
