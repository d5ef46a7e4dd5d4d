import random

CODE_MIN = 100000
CODE_MAX = 999999


class PropertyCodeGenerator:
    """Draws 6-digit internal property codes from one shared random source."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def next_code(self) -> int:
        return self.rng.randint(CODE_MIN, CODE_MAX)


code_generator = PropertyCodeGenerator()
