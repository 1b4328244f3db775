import unittest as ut

from rotor_machine import config, errors
from rotor_machine.permutation import Permutation
from rotor_machine.rotor import RotorKind

SMALL_CONFIG = """ABCDEFGH
3 2
R1 R (AB) (CD)
     (EF) (GH)
F1 N (ABC)
M1 MA (ABCDEFGH)
M2 MCE (AH) (BG)
"""


class ReadConfigTest(ut.TestCase):
    def test_default(self):
        machine = config.load_config(config.DEFAULT_CONFIG)
        self.assertEqual(machine.n_rotors, 4)
        self.assertEqual(machine.n_pawls, 3)
        self.assertSetEqual(set(machine.catalog), {'I', 'II', 'III', 'IV', 'V', 'B', 'C'})
        self.assertTrue(machine.catalog['B'].reflecting)
        self.assertEqual(machine.catalog['V'].notches, 'Z')

    def test_default_wirings_are_complete(self):
        machine = config.load_config(config.DEFAULT_CONFIG)
        fixed_points = {'I': 'S', 'II': 'AQ', 'III': 'N', 'IV': '', 'V': '', 'B': '', 'C': ''}
        for name, expected in fixed_points.items():
            perm = machine.catalog[name].permutation
            self.assertEqual(''.join(c for c in machine.alphabet if perm.permute_symbol(c) == c), expected)

    def test_small(self):
        machine = config.read_config(SMALL_CONFIG)
        self.assertEqual(machine.alphabet.symbols, 'ABCDEFGH')
        catalog = machine.catalog
        self.assertIs(catalog['R1'].kind, RotorKind.REFLECTOR)
        self.assertIs(catalog['F1'].kind, RotorKind.FIXED)
        self.assertIs(catalog['M2'].kind, RotorKind.MOVING)
        self.assertEqual(catalog['M2'].notches, 'CE')
        # cycles continued on the next line belong to the same rotor
        self.assertEqual(catalog['R1'].permutation.permute_symbol('G'), 'H')
        self.assertEqual(catalog['F1'].permutation.permute_symbol('H'), 'H')

    def test_malformed(self):
        for text in [
            'ABCD',
            'ABCD\n3',
            'ABCD\n3 x\nR R (AB)',
            'ABCD\n2 1\nR',
            'ABCD\n2 1\nR (AB)',
            'ABCD\n2 1\n(AB) R R',
            'ABCD\n2 1\nR X (AB)',
        ]:
            with self.assertRaises(errors.MalformedConfig):
                config.read_config(text)

    def test_bad_cycles(self):
        with self.assertRaises(errors.MalformedCycle):
            config.read_config('ABCD\n2 1\nR R (AE)\nM MA (ABCD)')
        with self.assertRaises(errors.InvalidAlphabet):
            config.read_config('AB CD\n2 1\nR R (AB)')


class SettingTest(ut.TestCase):
    def setUp(self):
        self.machine = config.load_config(config.DEFAULT_CONFIG)

    def test_full(self):
        setting = config.parse_setting('* B I II III AXL BCD (AB) (CD)', self.machine)
        self.assertEqual(setting.rotors, ('B', 'I', 'II', 'III'))
        self.assertEqual(setting.positions, 'AXL')
        self.assertEqual(setting.rings, 'BCD')
        self.assertEqual(setting.plugboard, Permutation('(AB)(CD)', self.machine.alphabet))

        setting.apply(self.machine)
        self.assertEqual(self.machine.installed, ('B', 'I', 'II', 'III'))
        self.assertEqual(self.machine.plugboard.permute_symbol('C'), 'D')

    def test_minimal(self):
        setting = config.parse_setting('*  B I II III  AAA', self.machine)
        self.assertEqual(setting.rings, '')
        self.assertEqual(setting.plugboard, Permutation('', self.machine.alphabet))

    def test_malformed(self):
        for line in [
            'B I II III AAA',
            '* B I II III',
            '* B I II (AB) AAA',
            '* B I II III AAA BBB CCC',
            '* B I II III AAA (AB) CCC',
        ]:
            with self.assertRaises(errors.MalformedConfig):
                config.parse_setting(line, self.machine)


class ProcessTest(ut.TestCase):
    def test_format_groups(self):
        self.assertEqual(config.format_groups('ABCDEFGHIJKL'), 'ABCDE FGHIJ KL')
        self.assertEqual(config.format_groups('ABCDE'), 'ABCDE')
        self.assertEqual(config.format_groups('ABCDEFG', 3), 'ABC DEF G')
        self.assertEqual(config.format_groups(''), '')

    def test_stream(self):
        machine = config.load_config(config.DEFAULT_CONFIG)
        lines = [
            '* B I II III AAA\n',
            'AAAAA\n',
            '\n',
            '* B I II III AAA\n',
            'AA A\tAA\n',
        ]
        self.assertListEqual(list(config.process(machine, lines)), ['BDZGO', '', 'BDZGO'])

    def test_round_trip(self):
        machine = config.load_config(config.DEFAULT_CONFIG)
        setting = '* C IV I V QRS FGH (AM) (FI) (NV) (PS) (TU) (WZ)'
        message = 'FROM HIS SHOULDER HIAWATHA TOOK THE CAMERA OF ROSEWOOD'
        encoded = list(config.process(machine, [setting, message], group=4))
        self.assertEqual(len(encoded), 1)
        decoded = list(config.process(machine, [setting, encoded[0]], group=100))
        self.assertEqual(decoded, [''.join(message.split())])

    def test_message_before_setting(self):
        machine = config.load_config(config.DEFAULT_CONFIG)
        with self.assertRaises(errors.MalformedConfig):
            list(config.process(machine, ['HELLO']))

    def test_foreign_symbol(self):
        machine = config.load_config(config.DEFAULT_CONFIG)
        with self.assertRaises(errors.SymbolNotInAlphabet):
            list(config.process(machine, ['* B I II III AAA', 'hello']))


if __name__ == '__main__':
    ut.main()
