"""Stack-probe routines modelled on an abstract stack.

Each routine is given the stack pointer at its entry (pointing at the pushed
return address) and the requested frame size in the accumulator register.
It reports every address it touches, in order, together with the stack
pointer and accumulator seen by the caller after it returns. A frame larger
than a page is touched one page at a time, so a guard page cannot be skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

PAGE_SIZE = 0x1000
WORD_SIZES = (4, 8)


@dataclass(frozen=True)
class ProbeResult:
    """What a probe routine did and the machine state it returned with."""

    probes: tuple[int, ...]
    sp: int
    ax: int
    return_address_at: int


def _mask(word_size: int) -> int:
    if word_size not in WORD_SIZES:
        raise ValueError(f"unsupported word size: {word_size}")
    return (1 << (8 * word_size)) - 1


def _validate(sp: int, size: int, word_size: int) -> int:
    mask = _mask(word_size)
    if not 0 <= sp <= mask:
        raise ValueError(f"stack pointer {sp:#x} does not fit in {word_size} bytes")
    if not 0 <= size <= mask:
        raise ValueError(f"frame size {size:#x} does not fit in {word_size} bytes")
    return mask


def _page_probes(base: int, size: int, *, loop_at_page: bool) -> Iterator[int]:
    """Addresses touched walking down from ``base`` by ``size`` bytes.

    ``loop_at_page`` selects whether a request of exactly one page enters the
    page loop (compare-and-jump-below) or goes straight to the remainder
    (compare-and-jump-not-above).
    """
    remaining = size
    enter = remaining >= PAGE_SIZE if loop_at_page else remaining > PAGE_SIZE
    addr = base
    if enter:
        while True:
            addr -= PAGE_SIZE
            yield addr
            remaining -= PAGE_SIZE
            if remaining <= PAGE_SIZE:
                break
    yield addr - remaining


def probestack(sp: int, size: int, word_size: int = 8) -> ProbeResult:
    """The ELF/Mach-O probe: touch each page of the frame, leave sp and ax unchanged."""
    mask = _validate(sp, size, word_size)
    probes = tuple(addr & mask for addr in _page_probes(sp, size, loop_at_page=False))
    return ProbeResult(
        probes=probes,
        sp=(sp + word_size) & mask,
        ax=size,
        return_address_at=sp,
    )


def probestack_uefi_x86(sp: int, size: int) -> ProbeResult:
    """The 32-bit UEFI probe, which also allocates the frame like ``_chkstk``."""
    word_size = 4
    mask = _validate(sp, size, word_size)
    # Three registers are pushed before probing at 8(%esp).
    base = sp - word_size
    probes = tuple(addr & mask for addr in _page_probes(base, size, loop_at_page=False))
    return ProbeResult(
        probes=probes,
        sp=(sp + word_size - size) & mask,
        ax=size,
        return_address_at=(sp - size) & mask,
    )


def chkstk_ms(sp: int, size: int, word_size: int = 8) -> ProbeResult:
    """Touch each page below the caller's stack pointer without moving it."""
    mask = _validate(sp, size, word_size)
    caller_sp = sp + word_size
    probes = tuple(addr & mask for addr in _page_probes(caller_sp, size, loop_at_page=True))
    return ProbeResult(
        probes=probes,
        sp=caller_sp & mask,
        ax=size,
        return_address_at=sp,
    )


def chkstk(sp: int, size: int, word_size: int = 8) -> ProbeResult:
    """Touch each page, then return with the frame allocated below the caller."""
    mask = _validate(sp, size, word_size)
    caller_sp = sp + word_size
    probes = tuple(addr & mask for addr in _page_probes(caller_sp, size, loop_at_page=True))
    new_top = caller_sp - size
    return ProbeResult(
        probes=probes,
        sp=new_top & mask,
        ax=size,
        return_address_at=(new_top - word_size) & mask,
    )


def alloca(sp: int, size: int, word_size: int = 8) -> ProbeResult:
    """Allocate ``size`` bytes on the stack by way of :func:`chkstk`."""
    return chkstk(sp, size, word_size)