"""STI Modder: run from a source checkout without installing.

    python main.py install
    python main.py check --game-dir "~/.steam/.../SurviveTheInternet"
"""

from sti_modder.cli import main

if __name__ == "__main__":
    main()
