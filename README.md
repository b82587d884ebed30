# builtinsim

A pure-Python model of two kinds of small runtime routines a compiler relies
on: copying, filling and comparing memory, and probing the stack before a
large frame is used.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Memory routines

`builtinsim.mem.Memory` is a fixed-size, byte-addressed memory. Addresses are
plain integers, so overlap and alignment behave as they would on a machine
with 8-byte words. Copies work a word at a time once at least 16 bytes are
involved: single bytes up to the first word-aligned destination, whole words,
then the remaining tail.

```python
from builtinsim.mem import Memory

mem = Memory(64)
base = mem.alloc(bytes(range(12)), align=8)

mem.memmove(base + 3, base + 6, 5)
print(list(mem.read(base, 12)))  # [0, 1, 2, 6, 7, 8, 9, 10, 8, 9, 10, 11]

mem.memset(base, 0x2009, 4)      # only the low byte of the value is used
print(mem.memcmp(base, base + 1, 3))  # 0
```

Operations:

- `alloc(data, align=8)` places bytes at the next aligned address and returns
  that address; `read(addr, n)` and `write(addr, data)` access memory directly.
- `memcpy`, `memmove` and `memset` return the destination address.
  `memmove` copies backwards when the destination overlaps the end of the
  source.
- `memcmp` and `bcmp` return the difference of the first unequal bytes, or 0.
- `strlen(s)` counts bytes up to the first zero byte.
- `memcpy_element_unordered_atomic`, `memmove_element_unordered_atomic` and
  `memset_element_unordered_atomic` move whole elements of 1, 2, 4, 8 or 16
  bytes; the byte count must be a multiple of the element size.

Accesses outside the memory raise `IndexError`; negative lengths, bad
alignments, unsupported element sizes and byte counts that are not a multiple
of the element size raise `ValueError`; `alloc` raises `MemoryError` when the
data does not fit, and `strlen` raises `IndexError` for an unterminated string.

## Stack probes

`builtinsim.probe` simulates stack-probe routines on an abstract stack. Each
function takes the stack pointer at entry (pointing at the pushed return
address) and the requested frame size, and returns a frozen `ProbeResult`
with the addresses touched (`probes`), the stack pointer and accumulator seen
by the caller afterwards (`sp`, `ax`), and where the return address sits
(`return_address_at`). A frame larger than a page (4096 bytes) is touched one
page at a time.

```python
from builtinsim.probe import probestack

result = probestack(0x10000, 0x2800)
print([hex(a) for a in result.probes])  # ['0xf000', '0xe000', '0xd800']
print(hex(result.sp), hex(result.ax))   # 0x10008 0x2800
```

- `probestack(sp, size, word_size=8)` touches the frame and leaves the stack
  pointer and size unchanged.
- `probestack_uefi_x86(sp, size)` is the 32-bit variant that also allocates
  the frame.
- `chkstk_ms(sp, size, word_size=8)` touches the pages below the caller's
  stack pointer without moving it.
- `chkstk(sp, size, word_size=8)` touches the pages and returns with the frame
  allocated; `alloca` does the same.

Word sizes of 4 and 8 bytes are supported; values that do not fit the word
size raise `ValueError`.

## What this package does not do

It offers no command-line tool, and it covers only memory and stack-probe
routines: there is no software arithmetic (multiplication, division, shifts,
floating point) and no generator of test inputs for such routines.