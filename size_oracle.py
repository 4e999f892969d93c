from syntax_nodes import TypeKind

WORD_SIZE = 8
MAX_ALIGN = 8

BASIC_SIZES = {
    "bool": 1,
    "int8": 1,
    "uint8": 1,
    "byte": 1,
    "int16": 2,
    "uint16": 2,
    "int32": 4,
    "uint32": 4,
    "rune": 4,
    "float32": 4,
    "int64": 8,
    "uint64": 8,
    "float64": 8,
    "complex64": 8,
    "int": WORD_SIZE,
    "uint": WORD_SIZE,
    "uintptr": WORD_SIZE,
    "complex128": 16,
    "string": 2 * WORD_SIZE,
}


def _align_up(offset, align):
    return (offset + align - 1) // align * align


class SizeOracle:
    """
    Byte footprint of a type under one fixed 64-bit layout model.

    Pointers, slices, maps, channels and funcs are one word; interfaces
    are two. Anything the model does not know is one word.
    """

    def __init__(self, word_size=WORD_SIZE, max_align=MAX_ALIGN):
        self.word_size = word_size
        self.max_align = max_align
        self._sizes = {}
        self._active = set()

    def size_of(self, t) -> int:
        if t is None:
            return self.word_size
        cached = self._sizes.get(id(t))
        if cached is not None:
            return cached[1]
        size = self._compute(t)
        # Keep t alive alongside its id so the id cannot be reused.
        self._sizes[id(t)] = (t, size)
        return size

    def align_of(self, t) -> int:
        if t is None:
            return self.word_size
        if t.kind == TypeKind.STRUCT:
            if id(t) in self._active:
                return self.word_size
            self._active.add(id(t))
            try:
                return max((self.align_of(f.type) for f in t.fields), default=1)
            finally:
                self._active.discard(id(t))
        if t.kind == TypeKind.ARRAY:
            return self.align_of(t.elem)
        if t.kind == TypeKind.BASIC:
            size = self._basic_size(t)
            if t.name.startswith("complex"):
                size //= 2
            return max(1, min(size, self.max_align))
        return self.word_size

    def _basic_size(self, t):
        if t.size is not None:
            return int(t.size)
        if t.name == "string":
            return 2 * self.word_size
        if t.name in ("int", "uint", "uintptr"):
            return self.word_size
        return BASIC_SIZES.get(t.name, self.word_size)

    def _compute(self, t):
        if t.kind == TypeKind.BASIC:
            return self._basic_size(t)
        if t.kind == TypeKind.STRUCT:
            # An invalid self-containing struct is treated as one word.
            if id(t) in self._active:
                return self.word_size
            self._active.add(id(t))
            try:
                offset = 0
                for f in t.fields:
                    offset = _align_up(offset, self.align_of(f.type))
                    offset += self.size_of(f.type)
            finally:
                self._active.discard(id(t))
            return _align_up(offset, self.align_of(t))
        if t.kind == TypeKind.ARRAY:
            return self.size_of(t.elem) * max(t.length, 0)
        if t.kind == TypeKind.INTERFACE:
            return 2 * self.word_size
        return self.word_size
