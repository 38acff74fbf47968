from chip8vm.common.hwconf import KEYS


class Keypad():
    ''' Hex keypad state, updated by the host and read by the CPU '''

    keys: list[bool]

    def __init__(self):
        self.keys = [False] * KEYS

    def key_pressed(self, key: int) -> bool:
        return self.keys[key]

    def set_key_pressed(self, key: int, pressed: bool):
        self.keys[key] = pressed

    def first_pressed(self) -> int | None:
        for key, pressed in enumerate(self.keys):
            if pressed:
                return key

        return None
