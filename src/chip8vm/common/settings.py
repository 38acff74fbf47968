from chip8vm.common.hwconf import STACK_DEPTH


class Settings:
    ''' Behaviour switches for the points where CHIP-8 interpreters disagree '''

    clip_sprites: bool                  # False wraps sprites around the display edges
    normalize_shift_flag: bool          # False stores the raw 0x80 bit in VF on SHL
    load_store_increments_index: bool   # True leaves I past the last register on Fx55/Fx65
    stack_depth: int

    def __init__(self):
        self.clip_sprites = True
        self.normalize_shift_flag = True
        self.load_store_increments_index = False
        self.stack_depth = STACK_DEPTH

    def update(
        self,
        clip_sprites: bool | None = None,
        normalize_shift_flag: bool | None = None,
        load_store_increments_index: bool | None = None,
        stack_depth: int | None = None
    ):
        if clip_sprites is not None:
            self.clip_sprites = clip_sprites

        if normalize_shift_flag is not None:
            self.normalize_shift_flag = normalize_shift_flag

        if load_store_increments_index is not None:
            self.load_store_increments_index = load_store_increments_index

        if stack_depth is not None:
            self.stack_depth = stack_depth

        return self
