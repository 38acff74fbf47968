MEMORY_SIZE      = 0x1000
FONT_BASE        = 0x000
GLYPH_SIZE       = 5
GLYPHS           = 16
FONT_SIZE        = GLYPH_SIZE * GLYPHS
ROM_BASE         = 0x200
ROM_CAPACITY     = MEMORY_SIZE - ROM_BASE

INSTRUCTION_SIZE = 2
REGISTERS        = 16
FLAG_REGISTER    = 0xF
STACK_DEPTH      = 16

DISPLAY_WIDTH    = 64
DISPLAY_HEIGHT   = 32
SPRITE_WIDTH     = 8

KEYS             = 16

# Default RGBA colors for display export
PIXEL_ON         = (128, 0, 0, 255)
PIXEL_OFF        = (0, 0, 0, 255)
