import copy
import logging
import types

from rotor_machine.alphabet import Alphabet
from rotor_machine.errors import (
    DuplicateRotor,
    EnigmaError,
    InvalidRotor,
    MisplacedReflector,
    OutOfRange,
    PawlCountMismatch,
    SettingLengthMismatch,
    SymbolNotInAlphabet,
    UnknownRotor,
)
from rotor_machine.permutation import Permutation
from rotor_machine.rotor import Rotor
from rotor_machine.trace import Tracer

logger = logging.getLogger(__name__)


class Machine:
    """
    A rotor machine with N_ROTORS slots and N_PAWLS pawls.

    Slot 0 holds the reflector and slot n_rotors - 1 the fast rotor. ROTORS is
    the catalog of wheels the machine can be fitted with; they serve as
    templates and are copied on installation, so several machines may share
    one catalog.
    """

    def __init__(self, alphabet: Alphabet, n_rotors: int, n_pawls: int, rotors, tracer: Tracer = None):
        if n_rotors < 2:
            raise EnigmaError(f'a machine needs at least two rotor slots, got {n_rotors}')
        if not 0 <= n_pawls < n_rotors:
            raise EnigmaError(f'invalid number of pawls {n_pawls} for {n_rotors} slots')

        catalog = dict()
        for rot in rotors:
            if rot.name in catalog:
                raise EnigmaError(f'rotor name {rot.name} used twice in the catalog')
            if rot.alphabet != alphabet:
                raise EnigmaError(f'rotor {rot.name} does not use the machine alphabet')
            catalog[rot.name] = rot
        if not catalog:
            raise EnigmaError('rotor catalog is empty')

        self.alphabet = alphabet
        self._n_rotors = n_rotors
        self._n_pawls = n_pawls
        self._catalog = types.MappingProxyType(catalog)
        self._slots = None
        self._plug_board = Rotor.fixed('Plugboard', Permutation('', alphabet))
        self.tracer = tracer or Tracer()

    @property
    def n_rotors(self) -> int:
        return self._n_rotors

    @property
    def n_pawls(self) -> int:
        return self._n_pawls

    @property
    def catalog(self):
        return self._catalog

    @property
    def installed(self):
        if self._slots is None:
            return ()
        return tuple(rot.name for rot in self._slots)

    def rotor(self, k: int) -> Rotor:
        return self._installed_slots()[k]

    def _installed_slots(self):
        if self._slots is None:
            raise EnigmaError('no rotors have been installed')
        return self._slots

    # ── configuration ──────────────────────────────────────────────

    def install_rotors(self, names):
        names = list(names)
        if len(names) != self._n_rotors:
            raise SettingLengthMismatch(f'expected {self._n_rotors} rotors, got {len(names)}')

        for name in names:
            if name not in self._catalog:
                raise UnknownRotor(f'no rotor named {name}')
        seen = set()
        for name in names:
            if name in seen:
                raise DuplicateRotor(f'rotor {name} is installed twice')
            seen.add(name)

        slots = [copy.copy(self._catalog[name]) for name in names]
        for i, rot in enumerate(slots):
            if rot.reflecting and i != 0:
                raise MisplacedReflector(f'reflector {rot.name} must be in the leftmost slot, not slot {i}')
            if i == 0 and not rot.reflecting:
                raise MisplacedReflector(f'rotor {rot.name} in the leftmost slot is not a reflector')

        n_moving = sum(rot.rotates for rot in slots)
        if n_moving != self._n_pawls:
            raise PawlCountMismatch(f'{n_moving} moving rotors installed, machine has {self._n_pawls} pawls')

        for rot in slots:
            rot.reset()
        self._slots = slots
        logger.debug('installed rotors %s', ' '.join(names))

    def _check_setting(self, setting: str, what: str):
        if len(setting) != self._n_rotors - 1:
            raise SettingLengthMismatch(f'{what} {setting!r} must have {self._n_rotors - 1} symbols')
        for char in setting:
            if char not in self.alphabet:
                raise SymbolNotInAlphabet(f'{what} symbol {char!r} is not in the alphabet')

    def set_rotor_positions(self, setting: str):
        """Set the positions of every rotor but the reflector, left to right."""
        slots = self._installed_slots()
        self._check_setting(setting, 'setting')
        for rot, char in zip(slots[1:], setting):
            rot.set_position(char)

    def set_ring_offsets(self, rings: str):
        slots = self._installed_slots()
        self._check_setting(rings, 'ring setting')
        for rot, char in zip(slots[1:], rings):
            rot.set_ring_offset(char)

    @property
    def plugboard(self) -> Permutation:
        return self._plug_board.permutation

    def set_plugboard(self, plugboard: Permutation):
        if not plugboard.is_involution():
            raise InvalidRotor('plugboard must be made of symbol swaps')
        self._plug_board.set_permutation(plugboard)
        logger.debug('plugboard set to %s', plugboard.cycles() or 'identity')

    def configure(self, names, setting: str, rings: str = None, plugboard: Permutation = None):
        """
        Fit the rotors NAMES and set them up for a new message.

        The ring setting is applied after the positions, since it shifts the
        stored positions relative to the window symbols.
        """
        self.install_rotors(names)
        self.set_rotor_positions(setting)
        if rings:
            self.set_ring_offsets(rings)
        self.set_plugboard(plugboard if plugboard is not None else Permutation('', self.alphabet))

    def window(self) -> str:
        """Current positions of the non-reflector rotors as symbols."""
        return ''.join(self.alphabet.to_symbol(rot.position) for rot in self._installed_slots()[1:])

    # ── stepping & signal path ─────────────────────────────────────

    def _step_rotors(self):
        """
        Advance the rotors before a symbol is converted.

        The notches are read before anything moves. The rightmost moving
        rotor always advances. Another moving rotor advances when the rotor
        to its right was at its notch, or when it was at its own notch and
        the rotor to its left is a moving one (double step).
        """
        slots = self._installed_slots()
        moving = [i for i, rot in enumerate(slots) if rot.rotates]
        if not moving:
            return

        at_notch = [rot.is_at_notch() for rot in slots]
        fast = moving[-1]
        to_advance = []
        for i in moving:
            if i == fast:
                to_advance.append(i)
            elif at_notch[i + 1]:
                to_advance.append(i)
            elif at_notch[i] and slots[i - 1].rotates:
                # double step: the left neighbour's pawl also pushes this notch
                to_advance.append(i)
        for i in to_advance:
            slots[i].advance()

    def convert(self, c: int) -> int:
        """Convert the index C, after first advancing the rotors."""
        slots = self._installed_slots()
        if not 0 <= c < self.alphabet.size:
            raise OutOfRange(f'index {c} out of range 0-{self.alphabet.size - 1}')
        self._step_rotors()

        tracer = self.tracer
        to_symbol = self.alphabet.to_symbol
        tracer.step(self.window())
        tracer.stage('input', to_symbol(c))

        number = self._plug_board.convert_forward(c)
        tracer.stage('plugboard', to_symbol(number))
        for rot in reversed(slots):
            number = rot.convert_forward(number)
            tracer.stage(rot.name, to_symbol(number))
        for rot in slots[1:]:
            number = rot.convert_backward(number)
            tracer.stage(rot.name, to_symbol(number))
        number = self._plug_board.convert_forward(number)
        tracer.stage('plugboard', to_symbol(number))
        tracer.done()

        return number

    def convert_message(self, input_: str) -> str:
        input_ints = [self.alphabet.to_index(char) for char in input_]
        return ''.join(self.alphabet.to_symbol(self.convert(number)) for number in input_ints)
