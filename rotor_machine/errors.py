class EnigmaError(ValueError):
    """Base class of every error raised by the machine and its harness."""


class InvalidAlphabet(EnigmaError):
    pass


class MalformedCycle(EnigmaError):
    pass


class SymbolNotInAlphabet(EnigmaError):
    pass


class OutOfRange(EnigmaError):
    pass


class InvalidRotor(EnigmaError):
    pass


class UnknownRotor(EnigmaError):
    pass


class DuplicateRotor(EnigmaError):
    pass


class MisplacedReflector(EnigmaError):
    pass


class PawlCountMismatch(EnigmaError):
    pass


class SettingLengthMismatch(EnigmaError):
    pass


class PositionOutOfRange(EnigmaError):
    pass


class MalformedConfig(EnigmaError):
    pass
