class ConcurrencyGate:
    """
    Flag "en curso" de UN control (un botón de un post). Mientras está
    puesto, cualquier trigger nuevo se ignora. No se comparte entre
    controles ni entre posts.
    """

    def __init__(self):
        self.in_progress = False

    def try_enter(self) -> bool:
        if self.in_progress:
            return False
        self.in_progress = True
        return True

    def leave(self) -> None:
        self.in_progress = False
