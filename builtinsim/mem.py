"""A flat, byte-addressable memory with C-style memory primitives.

Addresses are plain integers into a fixed-size buffer. Copies follow the
word-at-a-time strategy of a freestanding runtime: bytes up to the first
word-aligned destination, then whole words, then the remaining tail.
"""

from __future__ import annotations

WORD_SIZE = 8
WORD_MASK = WORD_SIZE - 1
# At least one full word must be copied for the word-wise path to pay off.
WORD_COPY_THRESHOLD = max(2 * WORD_SIZE, 16)
ADDRESS_MASK = (1 << (8 * WORD_SIZE)) - 1
ELEMENT_SIZES = (1, 2, 4, 8, 16)


class Memory:
    """A fixed-size region of simulated memory addressed by integer offsets."""

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"memory size must not be negative: {size}")
        self._buf = bytearray(size)
        self._next = 0

    @property
    def size(self) -> int:
        return len(self._buf)

    def _check(self, addr: int, n: int) -> None:
        if n < 0:
            raise ValueError(f"length must not be negative: {n}")
        if addr < 0 or addr + n > len(self._buf):
            raise IndexError(
                f"access of {n} bytes at {addr:#x} is outside memory of size {len(self._buf)}"
            )

    def alloc(self, data: bytes, align: int = WORD_SIZE) -> int:
        """Place ``data`` at the next address aligned to ``align`` and return it."""
        if align <= 0 or align & (align - 1):
            raise ValueError(f"alignment must be a positive power of two: {align}")
        addr = (self._next + align - 1) & ~(align - 1)
        if addr + len(data) > len(self._buf):
            raise MemoryError(f"cannot allocate {len(data)} bytes")
        self._buf[addr : addr + len(data)] = data
        self._next = addr + len(data)
        return addr

    def read(self, addr: int, n: int) -> bytes:
        self._check(addr, n)
        return bytes(self._buf[addr : addr + n])

    def write(self, addr: int, data: bytes) -> None:
        self._check(addr, len(data))
        self._buf[addr : addr + len(data)] = data

    def _copy_bytes_forward(self, dest: int, src: int, n: int) -> None:
        buf = self._buf
        for offset in range(n):
            buf[dest + offset] = buf[src + offset]

    def _copy_bytes_backward(self, dest_end: int, src_end: int, n: int) -> None:
        buf = self._buf
        for offset in range(1, n + 1):
            buf[dest_end - offset] = buf[src_end - offset]

    def _copy_forward(self, dest: int, src: int, n: int) -> None:
        buf = self._buf
        if n >= WORD_COPY_THRESHOLD:
            misalignment = (-dest) & WORD_MASK
            self._copy_bytes_forward(dest, src, misalignment)
            dest += misalignment
            src += misalignment
            n -= misalignment

            n_words = n & ~WORD_MASK
            for offset in range(0, n_words, WORD_SIZE):
                word = buf[src + offset : src + offset + WORD_SIZE]
                buf[dest + offset : dest + offset + WORD_SIZE] = word
            dest += n_words
            src += n_words
            n -= n_words
        self._copy_bytes_forward(dest, src, n)

    def _copy_backward(self, dest: int, src: int, n: int) -> None:
        buf = self._buf
        dest += n
        src += n
        if n >= WORD_COPY_THRESHOLD:
            misalignment = dest & WORD_MASK
            self._copy_bytes_backward(dest, src, misalignment)
            dest -= misalignment
            src -= misalignment
            n -= misalignment

            n_words = n & ~WORD_MASK
            for offset in range(WORD_SIZE, n_words + 1, WORD_SIZE):
                word = buf[src - offset : src - offset + WORD_SIZE]
                buf[dest - offset : dest - offset + WORD_SIZE] = word
            dest -= n_words
            src -= n_words
            n -= n_words
        self._copy_bytes_backward(dest, src, n)

    def memcpy(self, dest: int, src: int, n: int) -> int:
        """Copy ``n`` bytes from ``src`` to ``dest`` front to back; return ``dest``."""
        self._check(dest, n)
        self._check(src, n)
        self._copy_forward(dest, src, n)
        return dest

    def memmove(self, dest: int, src: int, n: int) -> int:
        """Copy ``n`` bytes between possibly overlapping regions; return ``dest``."""
        self._check(dest, n)
        self._check(src, n)
        delta = (dest - src) & ADDRESS_MASK
        if delta >= n:
            # dest is far enough ahead of src, or src is ahead of dest.
            self._copy_forward(dest, src, n)
        else:
            self._copy_backward(dest, src, n)
        return dest

    def memset(self, s: int, c: int, n: int) -> int:
        """Fill ``n`` bytes at ``s`` with the low byte of ``c``; return ``s``."""
        self._check(s, n)
        self._buf[s : s + n] = bytes([c & 0xFF]) * n
        return s

    def memcmp(self, s1: int, s2: int, n: int) -> int:
        """Difference of the first unequal bytes, or 0 when the regions match."""
        self._check(s1, n)
        self._check(s2, n)
        left = self._buf[s1 : s1 + n]
        right = self._buf[s2 : s2 + n]
        return next((a - b for a, b in zip(left, right) if a != b), 0)

    def bcmp(self, s1: int, s2: int, n: int) -> int:
        return self.memcmp(s1, s2, n)

    def strlen(self, s: int) -> int:
        """Number of bytes before the first zero byte starting at ``s``."""
        self._check(s, 0)
        end = self._buf.find(0, s)
        if end < 0:
            raise IndexError(f"string at {s:#x} is not terminated within memory")
        return end - s

    @staticmethod
    def _element_count(nbytes: int, element_size: int) -> int:
        if element_size not in ELEMENT_SIZES:
            raise ValueError(f"unsupported element size: {element_size}")
        if nbytes % element_size:
            raise ValueError(
                f"byte count {nbytes} is not a multiple of element size {element_size}"
            )
        return nbytes // element_size

    def memcpy_element_unordered_atomic(
        self, dest: int, src: int, nbytes: int, element_size: int
    ) -> None:
        """Copy whole elements front to back, each element in one step."""
        count = self._element_count(nbytes, element_size)
        self._check(dest, nbytes)
        self._check(src, nbytes)
        buf = self._buf
        for i in range(count):
            off = i * element_size
            buf[dest + off : dest + off + element_size] = buf[src + off : src + off + element_size]

    def memmove_element_unordered_atomic(
        self, dest: int, src: int, nbytes: int, element_size: int
    ) -> None:
        """Copy whole elements, choosing the direction that is safe for overlap."""
        count = self._element_count(nbytes, element_size)
        self._check(dest, nbytes)
        self._check(src, nbytes)
        buf = self._buf
        order = reversed(range(count)) if src < dest else range(count)
        for i in order:
            off = i * element_size
            buf[dest + off : dest + off + element_size] = buf[src + off : src + off + element_size]

    def memset_element_unordered_atomic(
        self, s: int, c: int, nbytes: int, element_size: int
    ) -> None:
        """Fill whole elements with the byte ``c`` repeated."""
        if not 0 <= c <= 0xFF:
            raise ValueError(f"fill byte out of range: {c}")
        count = self._element_count(nbytes, element_size)
        self._check(s, nbytes)
        self._buf[s : s + nbytes] = bytes([c]) * element_size * count