import string

from rotor_machine.errors import InvalidAlphabet, OutOfRange, SymbolNotInAlphabet

# characters with a meaning in cycle notation and settings lines
RESERVED = "() *"


class Alphabet:
    def __init__(self, chars: str = string.ascii_uppercase):
        if not chars:
            raise InvalidAlphabet('alphabet is empty')
        for char in chars:
            if char in RESERVED or char.isspace():
                raise InvalidAlphabet(f'illegal character {char!r} in alphabet')

        self.char_to_number_map = dict()
        for i, char in enumerate(chars):
            if char in self.char_to_number_map:
                raise InvalidAlphabet(f'character {char!r} appears twice in alphabet')
            self.char_to_number_map[char] = i
        self._chars = chars

    @property
    def symbols(self) -> str:
        return self._chars

    @property
    def size(self) -> int:
        return len(self._chars)

    def __len__(self):
        return len(self._chars)

    def __iter__(self):
        return iter(self._chars)

    def __contains__(self, symbol):
        return symbol in self.char_to_number_map

    def __eq__(self, other):
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._chars == other._chars

    def __hash__(self):
        return hash(self._chars)

    def __repr__(self):
        return f'Alphabet({self._chars!r})'

    def contains(self, symbol: str) -> bool:
        return symbol in self.char_to_number_map

    def to_index(self, symbol: str) -> int:
        try:
            return self.char_to_number_map[symbol]
        except KeyError:
            raise SymbolNotInAlphabet(f'{symbol!r} is not in the alphabet') from None

    def to_symbol(self, index: int) -> str:
        if not 0 <= index < len(self._chars):
            raise OutOfRange(f'index {index} out of range 0-{len(self._chars) - 1}')
        return self._chars[index]
