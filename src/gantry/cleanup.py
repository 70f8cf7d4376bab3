# SPDX-License-Identifier: MIT

import atexit

from gantry.repository.configuration import CONFIGURATION_REPO
from gantry.repository.id_map import ID_MAP_REPO
from gantry.repository.project import PROJECT_REPO
from gantry.repository.task import TASK_REPO


def flush() -> None:
    CONFIGURATION_REPO.flush()
    ID_MAP_REPO.flush()

    # Flush entity repositories
    PROJECT_REPO.flush()
    TASK_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush)
