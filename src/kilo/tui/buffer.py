from typing import Protocol

from .sequences import ControlSequence

DEFAULT_CAPACITY = 512


class Writer(Protocol):
    def write(self, data: bytes) -> int: ...


class PaintBuffer:
    data: bytearray
    length: int
    capacity: int

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.data = bytearray(capacity)
        self.length = 0
        self.capacity = capacity

    def append(self, data: bytes) -> None:
        end = self.length + len(data)

        if end > self.capacity:
            capacity = self.capacity
            while end > capacity:
                capacity *= 2
            self.data.extend(bytes(capacity - self.capacity))
            self.capacity = capacity

        self.data[self.length : end] = data
        self.length = end

    def append_sequence(self, *sequences: ControlSequence) -> None:
        for sequence in sequences:
            self.append(sequence.encode())

    def flush(self, destination: Writer) -> int:
        return destination.write(self.getvalue())

    def reset(self) -> None:
        self.length = 0

    def getvalue(self) -> bytes:
        return bytes(self.data[: self.length])

    def __len__(self) -> int:
        return self.length
