from algosdk import account


def new_address() -> str:
    _, address = account.generate_account()
    return address


class FakeClock:
    """Settable clock returning unix seconds."""

    def __init__(self, now: int) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> int:
        self.now += seconds
        return self.now

    def set(self, now: int) -> int:
        self.now = now
        return self.now
