"""Mod installer for Survive The Internet.

Mods are small JSON files dropped into `<game>/mods/`. Installing merges
every valid mod into the game's three prompt files under `<game>/content/`,
rebuilding each file from scratch. The reverse direction snapshots the
current content files as mods so they survive a reinstall.
"""
