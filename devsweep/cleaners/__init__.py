"""Cleaner implementations for each tool and location class."""

from typing import Dict, Type

from devsweep.core.cleaner import Cleaner

# Populated by each cleaner module. Import order below is the order cleaners run in.
CLEANER_REGISTRY: Dict[str, Type[Cleaner]] = {}

# Import all cleaner modules to ensure they register themselves
from . import system
from . import docker
from . import vmware
from . import vscode
from . import node
from . import brew
from . import python
from . import git
from . import xcode
from . import browsers
from . import downloads
from . import trash
from . import misc
