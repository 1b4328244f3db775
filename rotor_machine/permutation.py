import re

import numpy as np

from rotor_machine.alphabet import Alphabet
from rotor_machine.errors import MalformedCycle, OutOfRange, SymbolNotInAlphabet

_CYCLE_TEXT = re.compile(r'(?:\([^()]*\))*')
_CYCLE = re.compile(r'\(([^()]*)\)')


def _cycle_notation(forward, alphabet: Alphabet) -> str:
    """Write the index table FORWARD as cycles, leaving out fixed points."""
    seen = np.zeros(len(forward), dtype=bool)
    cycles = []
    for start in range(len(forward)):
        if seen[start] or forward[start] == start:
            continue
        members = []
        el = start
        while not seen[el]:
            seen[el] = True
            members.append(alphabet.to_symbol(el))
            el = int(forward[el])
        cycles.append('(' + ''.join(members) + ')')
    return ' '.join(cycles)


class Permutation:
    """
    A bijection on the index range of an alphabet, given in cycle notation.

    "(ABC) (DE)" maps A->B, B->C, C->A, D->E and E->D; every symbol that
    does not appear in a cycle maps to itself. Whitespace is ignored.
    """

    def __init__(self, cycles: str, alphabet: Alphabet):
        self.alphabet = alphabet
        n_chars = alphabet.size

        compact = ''.join(cycles.split())
        if not _CYCLE_TEXT.fullmatch(compact):
            raise MalformedCycle(f'cannot read {cycles!r} as cycle notation')

        self._forward = np.full(n_chars, -1, dtype=np.int64)
        for cycle in _CYCLE.findall(compact):
            if len(cycle) < 2:
                raise MalformedCycle(f'cycle ({cycle}) needs at least two members')
            for char in cycle:
                if char not in alphabet:
                    raise MalformedCycle(f'{char!r} in cycle ({cycle}) is not in the alphabet')
            members = [alphabet.to_index(char) for char in cycle]
            if len(set(members)) != len(members):
                raise MalformedCycle(f'cycle ({cycle}) repeats a symbol')
            for prev, nxt in zip(members, members[1:] + members[:1]):
                if self._forward[prev] != -1:
                    raise MalformedCycle(f'{alphabet.to_symbol(prev)!r} appears in more than one cycle')
                self._forward[prev] = nxt

        # the rest are fixed points
        positions = np.arange(n_chars)
        unmapped = self._forward == -1
        self._forward[unmapped] = positions[unmapped]

        self._backward = np.empty_like(self._forward)
        self._backward[self._forward] = positions

    @classmethod
    def from_wiring(cls, wiring: str, alphabet: Alphabet):
        """Build from a contact string: WIRING[i] is the image of the i-th symbol."""
        if sorted(wiring) != sorted(alphabet.symbols):
            raise MalformedCycle('wiring must be a permutation of the alphabet')
        forward = [alphabet.to_index(char) for char in wiring]
        return cls(_cycle_notation(forward, alphabet), alphabet)

    @classmethod
    def random(cls, alphabet: Alphabet, seed: int):
        rng = np.random.default_rng(seed)
        forward = rng.permutation(alphabet.size)
        return cls(_cycle_notation(forward, alphabet), alphabet)

    @classmethod
    def random_swaps(cls, alphabet: Alphabet, n_swaps: int, seed: int):
        """A plugboard-like permutation made of N_SWAPS disjoint symbol swaps."""
        if not 0 <= n_swaps <= alphabet.size // 2:
            raise MalformedCycle(f'cannot place {n_swaps} swaps on {alphabet.size} symbols')
        rng = np.random.default_rng(seed)
        # pick the jacks, then pair them up in order
        jacks = rng.choice(alphabet.size, size=2 * n_swaps, replace=False)
        cycles = ' '.join(
            '(' + alphabet.to_symbol(int(first)) + alphabet.to_symbol(int(second)) + ')'
            for first, second in zip(jacks[::2], jacks[1::2])
        )
        return cls(cycles, alphabet)

    def size(self) -> int:
        return self.alphabet.size

    def wrap(self, p: int) -> int:
        """Return P modulo the alphabet size, always in [0, size)."""
        return p % self.alphabet.size

    def permute(self, p: int) -> int:
        apply = self.wrap(p)
        if not 0 <= apply < self.alphabet.size:
            raise OutOfRange(f'cannot permute position {p}')
        return int(self._forward[apply])

    def invert(self, c: int) -> int:
        apply = self.wrap(c)
        if not 0 <= apply < self.alphabet.size:
            raise OutOfRange(f'cannot invert position {c}')
        return int(self._backward[apply])

    def permute_symbol(self, p: str) -> str:
        if p not in self.alphabet:
            raise SymbolNotInAlphabet(f'{p!r} is not in the alphabet')
        return self.alphabet.to_symbol(self.permute(self.alphabet.to_index(p)))

    def invert_symbol(self, c: str) -> str:
        if c not in self.alphabet:
            raise SymbolNotInAlphabet(f'{c!r} is not in the alphabet')
        return self.alphabet.to_symbol(self.invert(self.alphabet.to_index(c)))

    def derangement(self) -> bool:
        """Return True iff no symbol maps to itself."""
        return bool(np.all(self._forward != np.arange(self.alphabet.size)))

    def is_involution(self) -> bool:
        return bool(np.all(self._forward == self._backward))

    def cycles(self) -> str:
        return _cycle_notation(self._forward, self.alphabet)

    def __eq__(self, other):
        if not isinstance(other, Permutation):
            return NotImplemented
        return self.alphabet == other.alphabet and np.array_equal(self._forward, other._forward)

    def __hash__(self):
        return hash((self.alphabet, tuple(self._forward.tolist())))

    def __repr__(self):
        return f'Permutation({self.cycles()!r})'
