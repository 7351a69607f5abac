"""Fixed-width 128-bit set of boolean flags.

BitSet packs 128 independently addressable flags into a single unsigned
integer, with bit 0 as the least significant position. It supports
per-bit access, bitwise algebra, logical shifts and conversions to and
from integers, binary strings and bytes.

Examples:
    >>> b = BitSet.from_u64(0b1010)
    >>> b.test(1), b.test(2)
    (True, False)
    >>> (b << 2).to_u64()
    40
    >>> b.count()
    2
"""

import logging
import operator
from typing import Iterator, List, Optional

__all__ = ["BitSet", "OutOfRangeError"]

logger = logging.getLogger(__name__)

_CAPACITY = 128
_U64_LIMIT = 1 << 64
_U128_LIMIT = 1 << _CAPACITY
_ALL_ONES = _U128_LIMIT - 1
_HIGH_HALF = _ALL_ONES ^ (_U64_LIMIT - 1)
_BYTE_LENGTH = _CAPACITY // 8


class OutOfRangeError(IndexError):
    """A bit position lies outside ``[0, capacity)``.

    Attributes:
        position: The rejected position.
        capacity: The capacity it was checked against.
    """

    def __init__(self, position: int, capacity: int = _CAPACITY) -> None:
        super().__init__(
            f"bit position {position} out of range for capacity {capacity}"
        )
        self.position = position
        self.capacity = capacity


def _position(position) -> int:
    index = operator.index(position)
    if not 0 <= index < _CAPACITY:
        raise OutOfRangeError(index)
    return index


def _unsigned(value, limit: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} expects an int, got {type(value).__name__}")
    if not 0 <= value < limit:
        raise ValueError(f"{name}: {value} does not fit in {limit.bit_length() - 1} bits")
    return value


def _shift_amount(amount) -> int:
    count = operator.index(amount)
    if count < 0:
        raise ValueError(f"negative shift count {count}")
    return count


class BitSet:
    """Vector of exactly 128 bits with value semantics.

    Instances compare equal when their bit patterns are identical and hash
    accordingly. Binary operators return new instances; the augmented
    forms (``&=``, ``|=``, ``^=``, ``<<=``, ``>>=``) update the left operand.

    Examples:
        >>> BitSet().none()
        True
        >>> BitSet.ones().count()
        128
        >>> BitSet.from_u64(0xFF) & BitSet.from_u64(0x0F)
        BitSet(0xf)
    """

    __slots__ = ("_data",)

    CAPACITY = _CAPACITY

    def __init__(self) -> None:
        self._data = 0

    @classmethod
    def _from_data(cls, data: int) -> "BitSet":
        instance = cls.__new__(cls)
        instance._data = data
        return instance

    @classmethod
    def zeros(cls) -> "BitSet":
        """Create a set with every bit false."""
        return cls._from_data(0)

    @classmethod
    def ones(cls) -> "BitSet":
        """Create a set with every bit true."""
        return cls._from_data(_ALL_ONES)

    @classmethod
    def from_u64(cls, value: int) -> "BitSet":
        """Create a set whose low 64 bits are ``value``.

        Bits 64 to 127 are false.

        Raises:
            TypeError: If ``value`` is not an int.
            ValueError: If ``value`` is negative or needs more than 64 bits.
        """
        return cls._from_data(_unsigned(value, _U64_LIMIT, "from_u64"))

    @classmethod
    def from_u128(cls, value: int) -> "BitSet":
        """Create a set holding the 128-bit pattern of ``value``.

        Raises:
            TypeError: If ``value`` is not an int.
            ValueError: If ``value`` is negative or needs more than 128 bits.
        """
        return cls._from_data(_unsigned(value, _U128_LIMIT, "from_u128"))

    @classmethod
    def from_string(cls, bits: str) -> "BitSet":
        """Parse a binary digit string, most significant bit first.

        This inverts :meth:`as_string`. Strings shorter than 128 characters
        are right-aligned, so the last character is always bit 0.

        Args:
            bits: Between 1 and 128 characters, each ``"0"`` or ``"1"``.

        Raises:
            ValueError: If the string is empty, too long, or holds any other
                character.

        Examples:
            >>> BitSet.from_string("101").to_u64()
            5
        """
        if not isinstance(bits, str):
            raise TypeError(f"from_string expects a str, got {type(bits).__name__}")
        if not 0 < len(bits) <= _CAPACITY:
            raise ValueError(
                f"from_string expects 1 to {_CAPACITY} characters, got {len(bits)}"
            )
        if bits.strip("01"):
            raise ValueError(f"from_string expects only '0' and '1', got {bits!r}")
        return cls._from_data(int(bits, 2))

    @classmethod
    def from_bytes(cls, data: bytes) -> "BitSet":
        """Create a set from 16 little-endian bytes, as written by :meth:`to_bytes`."""
        if len(data) != _BYTE_LENGTH:
            raise ValueError(f"from_bytes expects {_BYTE_LENGTH} bytes, got {len(data)}")
        return cls._from_data(int.from_bytes(data, "little"))

    def capacity(self) -> int:
        """Number of addressable bits (always 128)."""
        return _CAPACITY

    def test(self, position: int) -> bool:
        """Whether the bit at ``position`` is set.

        Raises:
            OutOfRangeError: If ``position`` is not in ``[0, 128)``.
        """
        return bool(self._data >> _position(position) & 1)

    def get(self, position: int) -> Optional[bool]:
        """Bounded read of the bit at ``position``.

        Returns:
            The bit's value, or None if ``position`` is not in ``[0, 128)``.
        """
        try:
            index = _position(position)
        except OutOfRangeError as error:
            logger.debug("get: %s", error)
            return None
        return bool(self._data >> index & 1)

    def count(self) -> int:
        """Number of bits set to true."""
        return self._data.bit_count()

    def all(self) -> bool:
        return self._data == _ALL_ONES

    def none(self) -> bool:
        return self._data == 0

    def any(self) -> bool:
        return self._data != 0

    @property
    def support(self) -> List[int]:
        """Positions of the set bits, in ascending order."""
        positions = []
        data = self._data
        while data:
            lowest = data & -data
            positions.append(lowest.bit_length() - 1)
            data ^= lowest
        return positions

    def to_u64(self) -> Optional[int]:
        """The value as a 64-bit integer, or None if any of bits 64 to 127 is set."""
        if self._data & _HIGH_HALF:
            return None
        return self._data

    def to_u128(self) -> int:
        return self._data

    def to_bytes(self) -> bytes:
        """The 128 bits as 16 little-endian bytes."""
        return self._data.to_bytes(_BYTE_LENGTH, "little")

    def as_string(self) -> str:
        """Binary digits from bit 127 down to bit 0, always 128 characters."""
        return format(self._data, f"0{_CAPACITY}b")

    def set(self, position: int, value: bool = True) -> None:
        """Set the bit at ``position`` to ``value``.

        Raises:
            OutOfRangeError: If ``position`` is not in ``[0, 128)``. The set
                is left unchanged.
        """
        mask = 1 << _position(position)
        if value:
            self._data |= mask
        else:
            self._data &= ~mask

    def flip(self, position: int) -> None:
        """Invert the bit at ``position``.

        Raises:
            OutOfRangeError: If ``position`` is not in ``[0, 128)``. The set
                is left unchanged.
        """
        self._data ^= 1 << _position(position)

    def set_all(self) -> None:
        self._data = _ALL_ONES

    def reset_all(self) -> None:
        self._data = 0

    def flip_all(self) -> None:
        self._data ^= _ALL_ONES

    def copy(self) -> "BitSet":
        """Create an independent copy of this set."""
        return self._from_data(self._data)

    def __copy__(self) -> "BitSet":
        return self.copy()

    def __deepcopy__(self, memo) -> "BitSet":
        return self.copy()

    def __reduce__(self):
        return (type(self).from_u128, (self._data,))

    def __len__(self) -> int:
        return _CAPACITY

    def __iter__(self) -> Iterator[bool]:
        data = self._data
        for index in range(_CAPACITY):
            yield bool(data >> index & 1)

    def __getitem__(self, position: int) -> bool:
        if isinstance(position, slice):
            raise TypeError("BitSet does not support slicing")
        return self.test(position)

    def __setitem__(self, position: int, value: bool) -> None:
        if isinstance(position, slice):
            raise TypeError("BitSet does not support slicing")
        self.set(position, value)

    def __bool__(self) -> bool:
        return self.any()

    def __int__(self) -> int:
        return self._data

    def __index__(self) -> int:
        return self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitSet):
            return False
        return self._data == other._data

    def __ne__(self, other: object) -> bool:
        return not self == other

    def __hash__(self) -> int:
        return hash((BitSet, self._data))

    def __and__(self, other: "BitSet") -> "BitSet":
        if not isinstance(other, BitSet):
            return NotImplemented
        return self._from_data(self._data & other._data)

    def __iand__(self, other: "BitSet") -> "BitSet":
        if not isinstance(other, BitSet):
            return NotImplemented
        self._data &= other._data
        return self

    def __or__(self, other: "BitSet") -> "BitSet":
        if not isinstance(other, BitSet):
            return NotImplemented
        return self._from_data(self._data | other._data)

    def __ior__(self, other: "BitSet") -> "BitSet":
        if not isinstance(other, BitSet):
            return NotImplemented
        self._data |= other._data
        return self

    def __xor__(self, other: "BitSet") -> "BitSet":
        if not isinstance(other, BitSet):
            return NotImplemented
        return self._from_data(self._data ^ other._data)

    def __ixor__(self, other: "BitSet") -> "BitSet":
        if not isinstance(other, BitSet):
            return NotImplemented
        self._data ^= other._data
        return self

    def __invert__(self) -> "BitSet":
        return self._from_data(self._data ^ _ALL_ONES)

    def __lshift__(self, amount: int) -> "BitSet":
        if isinstance(amount, BitSet) or not hasattr(amount, "__index__"):
            return NotImplemented
        count = _shift_amount(amount)
        if count >= _CAPACITY:
            return self._from_data(0)
        return self._from_data((self._data << count) & _ALL_ONES)

    def __ilshift__(self, amount: int) -> "BitSet":
        shifted = self.__lshift__(amount)
        if shifted is NotImplemented:
            return NotImplemented
        self._data = shifted._data
        return self

    def __rshift__(self, amount: int) -> "BitSet":
        if isinstance(amount, BitSet) or not hasattr(amount, "__index__"):
            return NotImplemented
        # Python's right shift already drops everything past bit 0.
        return self._from_data(self._data >> _shift_amount(amount))

    def __irshift__(self, amount: int) -> "BitSet":
        shifted = self.__rshift__(amount)
        if shifted is NotImplemented:
            return NotImplemented
        self._data = shifted._data
        return self

    def __str__(self) -> str:
        return f"{self._data:#x}"

    def __repr__(self) -> str:
        return f"BitSet({self._data:#x})"
