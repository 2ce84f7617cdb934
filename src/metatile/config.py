"""Dynaconf settings for the metatile calculator.

Settings files are read from /etc/metatile/, ~/.config/metatile/ and the
current directory, then from the file named by
``METATILE_SETTINGS_FILE_FOR_DYNACONF``. ``METATILE_*`` environment
variables override them. The only key read is ``metatile``, the number
of tiles per metatile.
"""
import os
import pathlib

from dynaconf import Dynaconf

DEFAULT_SIZE = 1

SETTINGS_DIRS = [
    pathlib.Path("/etc/metatile/"),
    pathlib.Path("~/.config/metatile").expanduser(),
    pathlib.Path("./").absolute(),
]

settings_files = [str(directory / name)
                  for directory in SETTINGS_DIRS
                  for name in ("settings.toml", ".secrets.toml")]
if os.getenv("METATILE_SETTINGS_FILE_FOR_DYNACONF"):
    settings_files.append(
        str(pathlib.Path(os.getenv("METATILE_SETTINGS_FILE_FOR_DYNACONF")).absolute()))

settings = Dynaconf(
    merge_enabled=True,
    envvar_prefix="METATILE",
    settings_files=settings_files,
    environments=True,
)


def change_env(new_env):
    """Switch the active settings environment, e.g. 'production'."""
    settings.setenv(new_env)
    settings.reload()


def metatile_size():
    """Return the configured metatile size, `DEFAULT_SIZE` when unset."""
    return settings.get("metatile", DEFAULT_SIZE)
