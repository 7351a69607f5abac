"""
Benchmarks for BitSet operations, comparing against bitarray's fixed-length bitarray.
"""

try:
    from bitarray import bitarray
    from bitarray.util import ba2int, int2ba
    HAS_BITARRAY = True
except ImportError:
    HAS_BITARRAY = False

from bitset128 import BitSet

CAPACITY = 128


def value_pattern(density):
    """Deterministic 128-bit value with roughly every ``density``-th bit set."""
    return sum(1 << index for index in range(0, CAPACITY, density))


class BitSetInitialization:
    params = [[1, 3, 64]]
    param_names = ['density']

    def setup(self, density):
        self.value = value_pattern(density)
        self.string = format(self.value, f"0{CAPACITY}b")
        self.data = self.value.to_bytes(CAPACITY // 8, "little")

    def time_bitset_from_u128(self, density):
        BitSet.from_u128(self.value)

    def time_bitset_from_string(self, density):
        BitSet.from_string(self.string)

    def time_bitset_from_bytes(self, density):
        BitSet.from_bytes(self.data)

    def time_bitarray_from_int(self, density):
        if not HAS_BITARRAY:
            raise NotImplementedError("bitarray not installed")
        int2ba(self.value, length=CAPACITY, endian="little")

    def time_bitarray_from_string(self, density):
        if not HAS_BITARRAY:
            raise NotImplementedError("bitarray not installed")
        bitarray(self.string)


class BitSetBinaryOperations:
    params = [[1, 3, 64]]
    param_names = ['density']

    def setup(self, density):
        self.b1 = BitSet.from_u128(value_pattern(density))
        self.b2 = BitSet.from_u128(value_pattern(density) >> 1)

        if HAS_BITARRAY:
            self.ba1 = int2ba(value_pattern(density), length=CAPACITY, endian="little")
            self.ba2 = int2ba(value_pattern(density) >> 1, length=CAPACITY, endian="little")

    def time_bitset_xor(self, density):
        _ = self.b1 ^ self.b2

    def time_bitset_xor_inplace(self, density):
        self.b1 ^= self.b2

    def time_bitset_and(self, density):
        _ = self.b1 & self.b2

    def time_bitset_and_inplace(self, density):
        self.b1 &= self.b2

    def time_bitset_invert(self, density):
        _ = ~self.b1

    def time_bitarray_xor(self, density):
        if not HAS_BITARRAY:
            raise NotImplementedError("bitarray not installed")
        _ = self.ba1 ^ self.ba2

    def time_bitarray_xor_inplace(self, density):
        if not HAS_BITARRAY:
            raise NotImplementedError("bitarray not installed")
        self.ba1 ^= self.ba2

    def time_bitarray_and(self, density):
        if not HAS_BITARRAY:
            raise NotImplementedError("bitarray not installed")
        _ = self.ba1 & self.ba2

    def time_bitarray_invert(self, density):
        if not HAS_BITARRAY:
            raise NotImplementedError("bitarray not installed")
        _ = ~self.ba1


class BitSetShifts:
    params = [[0, 1, 63, 127, 128]]
    param_names = ['amount']

    def setup(self, amount):
        self.b = BitSet.ones()
        if HAS_BITARRAY:
            self.ba = bitarray(CAPACITY)
            self.ba.setall(True)

    def time_bitset_shift_left(self, amount):
        _ = self.b << amount

    def time_bitset_shift_right(self, amount):
        _ = self.b >> amount

    def time_bitarray_shift_left(self, amount):
        if not HAS_BITARRAY:
            raise NotImplementedError("bitarray not installed")
        _ = self.ba << amount

    def time_bitarray_shift_right(self, amount):
        if not HAS_BITARRAY:
            raise NotImplementedError("bitarray not installed")
        _ = self.ba >> amount


class BitSetIndexing:
    params = [[0, 64, 127, 128]]
    param_names = ['position']

    def setup(self, position):
        self.b = BitSet.from_u128(value_pattern(3))

    def time_bitset_get(self, position):
        _ = self.b.get(position)

    def time_bitset_set(self, position):
        if position < CAPACITY:
            self.b.set(position, True)

    def time_bitset_flip(self, position):
        if position < CAPACITY:
            self.b.flip(position)


class BitSetAggregations:
    params = [[1, 3, 64]]
    param_names = ['density']

    def setup(self, density):
        self.b = BitSet.from_u128(value_pattern(density))
        if HAS_BITARRAY:
            self.ba = int2ba(value_pattern(density), length=CAPACITY, endian="little")

    def time_bitset_count(self, density):
        _ = self.b.count()

    def time_bitset_support(self, density):
        _ = self.b.support

    def time_bitset_as_string(self, density):
        _ = self.b.as_string()

    def time_bitset_to_u64(self, density):
        _ = self.b.to_u64()

    def time_bitarray_count(self, density):
        if not HAS_BITARRAY:
            raise NotImplementedError("bitarray not installed")
        _ = self.ba.count()

    def time_bitarray_to_int(self, density):
        if not HAS_BITARRAY:
            raise NotImplementedError("bitarray not installed")
        _ = ba2int(self.ba)


class BitSetIteration:
    def setup(self):
        self.b = BitSet.from_u128(value_pattern(3))
        if HAS_BITARRAY:
            self.ba = int2ba(value_pattern(3), length=CAPACITY, endian="little")

    def time_bitset_iter(self):
        for bit in self.b:
            pass

    def time_bitarray_iter(self):
        if not HAS_BITARRAY:
            raise NotImplementedError("bitarray not installed")
        for bit in self.ba:
            pass
