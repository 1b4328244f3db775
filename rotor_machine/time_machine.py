import time

import numpy as np
import tqdm

from rotor_machine.config import DEFAULT_CONFIG, load_config, parse_setting
from rotor_machine.machine import Machine


def benchmark(machine: Machine, n_messages: int = 3000, chars_per_message: int = 256, seed: int = 0,
              disable_tqdm: bool = False) -> float:
    """Return the average time to encode one random message from the current setting."""
    rng = np.random.default_rng(seed)
    symbols = np.array(list(machine.alphabet.symbols))
    rotor_positions = machine.window()

    messages = [''.join(rng.choice(symbols, size=chars_per_message)) for _ in range(n_messages)]
    tick = time.time()
    for message in tqdm.tqdm(messages, disable=disable_tqdm):
        machine.set_rotor_positions(rotor_positions)
        machine.convert_message(message)
    tock = time.time()

    return (tock - tick) / n_messages


if __name__ == '__main__':
    chars_per_message = 256
    machine = load_config(DEFAULT_CONFIG)
    setting = parse_setting('* B I II III DEH (AB) (CD) (EF) (GH) (IJ) (KL) (MN) (OP) (QR) (ST)', machine)
    setting.apply(machine)

    avg_time = benchmark(machine, chars_per_message=chars_per_message)
    print(f'Average encoding time for message with {chars_per_message} characters: {avg_time:.2e} seconds')
