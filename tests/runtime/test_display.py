import pytest

from chip8vm.common.hwconf import DISPLAY_WIDTH, DISPLAY_HEIGHT
from chip8vm.runtime.display import Framebuffer
from chip8vm.runtime.memory import FONT, MemoryViolation

from fixtures import (  # noqa: F401
    SPRITE_BASE, memory, with_sprite, display, wrapping_display
)


def lit(display: Framebuffer) -> set[tuple[int, int]]:
    return {
        (x, y)
        for y, row in enumerate(display.rows())
        for x, pixel in enumerate(row)
        if pixel
    }


def test_draw_glyph(display, memory):  # noqa: F811
    collision = display.draw(0, 5, 0, 0, memory)

    assert not collision

    for y in range(5):
        for x in range(8):
            assert display.pixel(x, y) == (FONT[y] >> (7 - x)) & 1


def test_double_draw_restores(display, with_sprite):  # noqa: F811
    display.draw(0, 5, 8, 4, with_sprite)    # glyph 0 as background
    before = display.rows()

    display.draw(SPRITE_BASE, 3, 10, 4, with_sprite)
    assert display.draw(SPRITE_BASE, 3, 10, 4, with_sprite)
    assert display.rows() == before


def test_clear_then_draw(display, with_sprite):  # noqa: F811
    display.fill(1)
    display.clear()
    display.draw(SPRITE_BASE, 3, 5, 5, with_sprite)

    fresh = Framebuffer()
    fresh.draw(SPRITE_BASE, 3, 5, 5, with_sprite)

    assert display.rows() == fresh.rows()


def test_origin_wraps(display, with_sprite):  # noqa: F811
    display.draw(SPRITE_BASE, 3, DISPLAY_WIDTH + 1, DISPLAY_HEIGHT + 2, with_sprite)

    expected = Framebuffer()
    expected.draw(SPRITE_BASE, 3, 1, 2, with_sprite)

    assert display.rows() == expected.rows()


def test_clips_right_edge(display, with_sprite):  # noqa: F811
    display.draw(SPRITE_BASE, 1, DISPLAY_WIDTH - 2, 0, with_sprite)

    assert lit(display) == {(DISPLAY_WIDTH - 2, 0), (DISPLAY_WIDTH - 1, 0)}


def test_clips_bottom_edge(display, with_sprite):  # noqa: F811
    display.draw(SPRITE_BASE, 3, 0, DISPLAY_HEIGHT - 1, with_sprite)

    assert lit(display) == {(x, DISPLAY_HEIGHT - 1) for x in range(8)}


def test_wraps_right_edge(wrapping_display, with_sprite):  # noqa: F811
    wrapping_display.draw(SPRITE_BASE, 1, DISPLAY_WIDTH - 2, 0, with_sprite)

    assert lit(wrapping_display) == {(DISPLAY_WIDTH - 2, 0), (DISPLAY_WIDTH - 1, 0)} | {
        (x, 0) for x in range(6)
    }


def test_wraps_bottom_edge(wrapping_display, with_sprite):  # noqa: F811
    wrapping_display.draw(SPRITE_BASE, 3, 0, DISPLAY_HEIGHT - 1, with_sprite)

    assert lit(wrapping_display) == {(x, DISPLAY_HEIGHT - 1) for x in range(8)} | {
        (0, 0), (7, 0)
    } | {(x, 1) for x in range(8)}


def test_collision_only_when_pixel_turns_off(display, with_sprite):  # noqa: F811
    display.draw(SPRITE_BASE + 1, 1, 0, 0, with_sprite)    # 0x81

    # 0xFF over 0x81: two pixels go off, six come on
    assert display.draw(SPRITE_BASE, 1, 0, 0, with_sprite)
    assert lit(display) == {(x, 0) for x in range(1, 7)}


def test_zero_height_sprite(display, with_sprite):  # noqa: F811
    assert not display.draw(SPRITE_BASE, 0, 0, 0, with_sprite)
    assert lit(display) == set()


def test_to_rgba(display, memory):  # noqa: F811
    display.draw(0, 1, 0, 0, memory)
    data = display.to_rgba(on=(255, 255, 255, 255), off=(0, 0, 0, 255))

    assert len(data) == DISPLAY_WIDTH * DISPLAY_HEIGHT * 4
    assert data[0:4] == bytes([255, 255, 255, 255])
    assert data[4 * 4:5 * 4] == bytes([0, 0, 0, 255])


def test_to_text(display, memory):  # noqa: F811
    display.draw(0, 5, 0, 0, memory)
    lines = display.to_text().splitlines()

    assert len(lines) == DISPLAY_HEIGHT
    assert lines[0] == '####' + '.' * (DISPLAY_WIDTH - 4)
    assert lines[1] == '#..#' + '.' * (DISPLAY_WIDTH - 4)


def test_sprite_past_memory_end_draws_nothing(display, memory):  # noqa: F811
    memory.write8(0xFFF, 0xFF)

    with pytest.raises(MemoryViolation):
        display.draw(0xFFF, 2, 0, 0, memory)

    assert lit(display) == set()
