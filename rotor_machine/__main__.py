import sys

from rotor_machine.main import main

sys.exit(main())
