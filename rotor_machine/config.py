"""
Text formats around the machine: the rotor catalog and the message stream.

A catalog starts with the alphabet on its own line and the number of rotor
slots and pawls on the next, followed by one entry per rotor::

    ABCDEFGHIJKLMNOPQRSTUVWXYZ
    4 3
    I   MQ (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ)
    B   R  (AY) (BR) (CU) ...

The second word of an entry is the rotor type (M moving, N fixed,
R reflector) directly followed by the notches. The cycles of an entry may
continue on the following lines.

A message stream consists of settings lines such as
``* B I II III AXL BBB (AB) (CD)`` (rotors, positions, optional rings,
optional plugboard), each followed by the message lines to convert with
that setting.
"""
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from rotor_machine.alphabet import Alphabet
from rotor_machine.errors import MalformedConfig
from rotor_machine.machine import Machine
from rotor_machine.permutation import Permutation
from rotor_machine.rotor import Rotor, RotorKind

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path(__file__).with_name('default.conf')

# a parenthesised cycle or a plain word
_TOKEN = re.compile(r'\([^()]*\)|\S+')


def _is_cycle(token: str) -> bool:
    return token.startswith('(')


def read_config(text: str, tracer=None) -> Machine:
    lines = text.splitlines()
    if len(lines) < 2:
        raise MalformedConfig('configuration file truncated')

    alphabet = Alphabet(lines[0].strip())
    try:
        n_rotors, n_pawls = (int(word) for word in lines[1].split())
    except ValueError:
        raise MalformedConfig(f'expected slot and pawl counts, found {lines[1]!r}') from None

    tokens = _TOKEN.findall('\n'.join(lines[2:]))
    rotors = []
    i = 0
    while i < len(tokens):
        name = tokens[i]
        if _is_cycle(name):
            raise MalformedConfig(f'expected a rotor name, found {name}')
        if i + 1 >= len(tokens) or _is_cycle(tokens[i + 1]):
            raise MalformedConfig(f'configuration file truncated at rotor {name}')
        type_notches = tokens[i + 1]
        i += 2

        cycles = []
        while i < len(tokens) and _is_cycle(tokens[i]):
            cycles.append(tokens[i])
            i += 1

        try:
            kind = RotorKind(type_notches[0])
        except ValueError:
            raise MalformedConfig(f'unknown type {type_notches[0]!r} of rotor {name}') from None
        permutation = Permutation(' '.join(cycles), alphabet)
        rotors.append(Rotor(name, permutation, kind, type_notches[1:]))

    logger.debug('read %d rotors for %d slots, %d pawls', len(rotors), n_rotors, n_pawls)
    return Machine(alphabet, n_rotors, n_pawls, rotors, tracer=tracer)


def load_config(path, tracer=None) -> Machine:
    try:
        text = Path(path).read_text(encoding='utf-8')
    except UnicodeDecodeError:
        raise MalformedConfig(f'could not read {path}: not UTF-8 text') from None
    return read_config(text, tracer=tracer)


@dataclass(frozen=True)
class Setting:
    """One settings line of the message stream."""

    rotors: tuple
    positions: str
    rings: str = ''
    plugboard: Permutation = None

    def apply(self, machine: Machine):
        machine.configure(self.rotors, self.positions, self.rings or None, self.plugboard)


def parse_setting(line: str, machine: Machine) -> Setting:
    tokens = _TOKEN.findall(line)
    if not tokens or tokens[0] != '*':
        raise MalformedConfig(f'settings line must start with "*": {line!r}')

    words = tokens[1:]
    n_rotors = machine.n_rotors
    if len(words) < n_rotors + 1:
        raise MalformedConfig(f'settings line names fewer than {n_rotors} rotors and a position: {line!r}')
    rotors = tuple(words[:n_rotors])
    positions = words[n_rotors]
    if _is_cycle(positions) or any(_is_cycle(name) for name in rotors):
        raise MalformedConfig(f'settings line names fewer than {n_rotors} rotors and a position: {line!r}')

    rest = words[n_rotors + 1:]
    rings = ''
    if rest and not _is_cycle(rest[0]):
        rings = rest.pop(0)
    if not all(_is_cycle(token) for token in rest):
        raise MalformedConfig(f'unexpected text after the plugboard: {line!r}')

    return Setting(rotors, positions, rings, Permutation(' '.join(rest), machine.alphabet))


def format_groups(text: str, size: int = 5) -> str:
    return ' '.join(text[i:i + size] for i in range(0, len(text), size))


def process(machine: Machine, lines, group: int = 5):
    """Convert a message stream, yielding the output lines."""
    configured = False
    for line in lines:
        if line.lstrip().startswith('*'):
            parse_setting(line, machine).apply(machine)
            configured = True
            continue

        message = ''.join(line.split())
        if not message:
            yield ''
            continue
        if not configured:
            raise MalformedConfig('message found before the first settings line')
        yield format_groups(machine.convert_message(message), group)
