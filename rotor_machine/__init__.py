"""
rotor_machine - simulator of electromechanical rotor cipher machines.
"""

from rotor_machine.alphabet import Alphabet
from rotor_machine.config import DEFAULT_CONFIG, Setting, load_config, parse_setting, process, read_config
from rotor_machine.errors import (
    DuplicateRotor,
    EnigmaError,
    InvalidAlphabet,
    InvalidRotor,
    MalformedConfig,
    MalformedCycle,
    MisplacedReflector,
    OutOfRange,
    PawlCountMismatch,
    PositionOutOfRange,
    SettingLengthMismatch,
    SymbolNotInAlphabet,
    UnknownRotor,
)
from rotor_machine.machine import Machine
from rotor_machine.permutation import Permutation
from rotor_machine.rotor import Rotor, RotorKind
from rotor_machine.trace import LoggingTracer, RecordingTracer, Tracer

__version__ = "0.1.0"

__all__ = [
    'Alphabet',
    'Permutation',
    'Rotor',
    'RotorKind',
    'Machine',
    'Tracer',
    'LoggingTracer',
    'RecordingTracer',
    'Setting',
    'DEFAULT_CONFIG',
    'read_config',
    'load_config',
    'parse_setting',
    'process',
    'EnigmaError',
    'InvalidAlphabet',
    'MalformedCycle',
    'SymbolNotInAlphabet',
    'OutOfRange',
    'InvalidRotor',
    'UnknownRotor',
    'DuplicateRotor',
    'MisplacedReflector',
    'PawlCountMismatch',
    'SettingLengthMismatch',
    'PositionOutOfRange',
    'MalformedConfig',
]
