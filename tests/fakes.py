from gateway import Gateway


class FakeGateway(Gateway):
    """Gateway that accepts every key and reports every version as latest."""

    def __init__(self, valid: bool = True):
        self.valid = valid
        self.authenticated = []
        self.closed = False

    def authenticate_key(self, key: str) -> bool:
        self.authenticated.append(key)
        return self.valid

    def latest_version(self, current: str) -> bool:
        return True

    def close(self) -> None:
        self.closed = True
