#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import os.path
import subprocess

from importlib import metadata


ci: bool = os.environ.get('CI', 'false').lower() == 'true'


distribution = 'take-home-pay'


def get_version() -> str:
    try:
        version = subprocess.check_output([
            'git',
                '-C', os.path.dirname(__file__),
            'show',
                '-s',
                '--date=format:%Y-%m-%d',
                '--format=%h (%cd)',
                'HEAD',
        ], text=True, stderr=subprocess.DEVNULL)
    except (FileNotFoundError, subprocess.CalledProcessError):
        if ci:
            raise
        # Not a git checkout, so fall back to the installed package
        try:
            version = metadata.version(distribution)
        except metadata.PackageNotFoundError:
            version = 'unknown'
    else:
        version = version.rstrip()
    return version
