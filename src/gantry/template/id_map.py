# SPDX-License-Identifier: MIT

from gantry.model.id_map import IdMap


def get_id_map_template() -> IdMap:
    return {
        "tasks": {"synthetic_to_real": {}, "real_to_synthetic": {}},
        "projects": {"synthetic_to_real": {}, "real_to_synthetic": {}},
    }
