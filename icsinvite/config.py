"""
Configuration for the invitation importer.  The only thing that really
needs configuring is the timezone used for floating times and all-day
events, which by default is the timezone of the host.

The config file is JSON or YAML, i.e.::

    {"timezone": "Europe/Oslo"}
"""
import functools
import json
import logging
import os
from datetime import tzinfo
from typing import Any
from typing import Dict
from typing import Optional
from typing import Union

import tzlocal

from icsinvite.lib import error
from icsinvite.lib.dates import resolve_timezone

log = logging.getLogger("icsinvite")

TIMEZONE_ENV = "ICSINVITE_TIMEZONE"


def config_paths() -> tuple:
    home = os.environ.get("HOME", "/")
    return (
        os.path.join(home, ".config", "icsinvite", "config.conf"),
        os.path.join(home, ".config", "icsinvite", "config.yaml"),
        os.path.join(home, ".config", "icsinvite", "config.json"),
        "/etc/icsinvite/config.conf",
    )


def read_config(fn: Optional[str] = None) -> Dict[str, Any]:
    """
    Loads the first config file found (or ``fn``, if given).  Returns
    an empty dict if there is none, or if it can't be made sense of.
    """
    if not fn:
        for path in config_paths():
            if os.path.exists(path):
                return read_config(path)
        return {}

    with open(fn, "rb") as config_file:
        raw = config_file.read()
    try:
        config = json.loads(raw)
    except json.decoder.JSONDecodeError:
        ## yaml is an optional dependency
        try:
            import yaml
        except ImportError:
            log.error(f"config file {fn} is not valid json, and pyyaml is not installed.")
            return {}
        try:
            config = yaml.safe_load(raw)
        except yaml.YAMLError:
            log.error(f"config file {fn} is neither valid json nor yaml.  It will be ignored")
            return {}
    if not isinstance(config, dict):
        log.error(f"config file {fn} should contain a mapping.  It will be ignored")
        return {}
    return config


@functools.lru_cache(maxsize=None)
def host_default_timezone() -> tzinfo:
    """
    The timezone from the config file, or else the one of the host.
    Looked up once per process, call ``host_default_timezone.cache_clear()``
    after changing the config.
    """
    name = read_config().get("timezone")
    if name:
        try:
            return resolve_timezone(name)
        except error.RFC5545Error:
            log.error(f"unknown timezone {name!r} in config file, using the host timezone")
    return tzlocal.get_localzone()


def get_default_timezone(tz: Optional[Union[str, tzinfo]] = None) -> tzinfo:
    """
    Resolves the timezone used for floating times, the noon anchor of
    all-day dates and the derived end of all-day events.

    In order of precedence:

    1. The ``tz`` argument, a tzinfo or an IANA name
    2. The ``ICSINVITE_TIMEZONE`` environment variable
    3. The ``timezone`` key of the config file
    4. The local timezone of the host

    An unknown timezone name given as argument or in the environment
    raises InvalidDateFormat.
    """
    if isinstance(tz, tzinfo):
        return tz
    if not tz:
        tz = os.environ.get(TIMEZONE_ENV)
    if tz:
        return resolve_timezone(tz)
    return host_default_timezone()
