import sys

from .flappy_game import main

sys.exit(main())
