class MyFastError(Exception):
    """Base class for domain errors raised by myfast."""


class FastAlreadyActiveError(MyFastError, ValueError):
    def __init__(self, fast_id: str | None = None) -> None:
        self.fast_id = fast_id
        super().__init__("A fast is already active. End the current fast before starting a new one.")


class UnknownPreferenceError(MyFastError, KeyError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unknown notification preference: {key}")
