import enum

from rotor_machine.errors import InvalidRotor, PositionOutOfRange, SymbolNotInAlphabet
from rotor_machine.permutation import Permutation


class RotorKind(enum.Enum):
    # the letters are the type codes of the catalog file
    REFLECTOR = 'R'
    FIXED = 'N'
    MOVING = 'M'


class Rotor:
    """
    A wheel of the machine: a fixed wiring seen through a rotational offset.

    The kind decides what the wheel may do. Moving rotors advance when
    stepped and carry notches, fixed rotors keep whatever position they are
    set to, and reflectors stay at position 0 in the leftmost slot.
    """

    def __init__(self, name: str, permutation: Permutation, kind: RotorKind = RotorKind.FIXED, notches: str = ''):
        alphabet = permutation.alphabet
        if kind is RotorKind.MOVING and not notches:
            raise InvalidRotor(f'moving rotor {name} needs at least one notch')
        if kind is not RotorKind.MOVING and notches:
            raise InvalidRotor(f'rotor {name} does not move and cannot have notches')
        if kind is RotorKind.REFLECTOR and not permutation.is_involution():
            raise InvalidRotor(f'reflector {name} must be wired in pairs')
        for notch in notches:
            if notch not in alphabet:
                raise SymbolNotInAlphabet(f'notch {notch!r} of rotor {name} is not in the alphabet')

        self.name = name
        self.kind = kind
        self._permutation = permutation
        self._notches = tuple(sorted({alphabet.to_index(notch) for notch in notches}))
        self._ring_notches = self._notches
        self.position = 0

    @classmethod
    def moving(cls, name: str, permutation: Permutation, notches: str):
        return cls(name, permutation, RotorKind.MOVING, notches)

    @classmethod
    def fixed(cls, name: str, permutation: Permutation):
        return cls(name, permutation, RotorKind.FIXED)

    @classmethod
    def reflector(cls, name: str, permutation: Permutation):
        return cls(name, permutation, RotorKind.REFLECTOR)

    @property
    def permutation(self) -> Permutation:
        return self._permutation

    @property
    def alphabet(self):
        return self._permutation.alphabet

    @property
    def size(self) -> int:
        return self._permutation.size()

    @property
    def rotates(self) -> bool:
        return self.kind is RotorKind.MOVING

    @property
    def reflecting(self) -> bool:
        return self.kind is RotorKind.REFLECTOR

    @property
    def notches(self) -> str:
        """Ring-adjusted notch positions as symbols."""
        return ''.join(self.alphabet.to_symbol(notch) for notch in self._ring_notches)

    def set_permutation(self, permutation: Permutation):
        if permutation.alphabet != self.alphabet:
            raise InvalidRotor(f'rotor {self.name} cannot take a wiring over another alphabet')
        self._permutation = permutation

    def _to_position(self, posn) -> int:
        if isinstance(posn, str):
            if posn not in self.alphabet:
                raise PositionOutOfRange(f'position {posn!r} of rotor {self.name} is not in the alphabet')
            return self.alphabet.to_index(posn)
        if not 0 <= posn < self.size:
            raise PositionOutOfRange(f'position {posn} of rotor {self.name} out of range 0-{self.size - 1}')
        return posn

    def set_position(self, posn):
        posn = self._to_position(posn)
        if self.reflecting and posn != 0:
            raise PositionOutOfRange(f'reflector {self.name} has only one position')
        self.position = posn

    def set_ring_offset(self, ring):
        ring = self._to_position(ring)
        if self.reflecting:
            return
        wrap = self._permutation.wrap
        self.position = wrap(self.position - ring)
        self._ring_notches = tuple(wrap(notch - ring) for notch in self._notches)

    def reset(self):
        self.position = 0
        self._ring_notches = self._notches

    def advance(self):
        if self.rotates:
            self.position = self._permutation.wrap(self.position + 1)

    def is_at_notch(self) -> bool:
        return self.rotates and self.position in self._ring_notches

    def convert_forward(self, p: int) -> int:
        wrap = self._permutation.wrap
        return wrap(self._permutation.permute(wrap(p + self.position)) - self.position)

    def convert_backward(self, e: int) -> int:
        wrap = self._permutation.wrap
        return wrap(self._permutation.invert(wrap(e + self.position)) - self.position)

    def __repr__(self):
        return f'<Rotor {self.name} {self.kind.name} pos={self.position}>'
